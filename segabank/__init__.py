"""SegaBank back-office: agencies, accounts and operations over PostgreSQL."""

__version__ = "0.1.0"
