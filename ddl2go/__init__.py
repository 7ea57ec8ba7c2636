"""Go model struct generator for MySQL CREATE TABLE statements."""

__version__ = "0.1.0"
