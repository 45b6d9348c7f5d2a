"""Enumeration types for banking entities."""

from enum import Enum


class AccountType(str, Enum):
    """Account variant, stored in ``compte.type`` by its label."""

    SIMPLE = "simple"
    SAVINGS = "epargne"
    FEE = "payant"


class OperationType(str, Enum):
    DEPOSIT = "depot"
    WITHDRAWAL = "retrait"
