# Command-line interface
