# Theme Park Wait Summary - Feed Collection Package
