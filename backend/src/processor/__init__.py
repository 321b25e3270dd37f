# Theme Park Wait Summary - Processing Package
