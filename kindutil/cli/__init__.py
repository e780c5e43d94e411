"""Command-line output: a terminal loading spinner."""