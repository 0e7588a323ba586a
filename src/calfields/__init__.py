"""calfields — immutable, rule-validated calendar field sets."""

__version__ = "0.1.0"
