"""msisdn-cleaner: validation, carrier classification and repair of +254 phone lists."""

__version__ = "0.1.0"
