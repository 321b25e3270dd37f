# Theme Park Wait Summary - Utilities Package
