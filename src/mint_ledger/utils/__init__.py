"""Parsing, logging, and output helpers shared across mint-ledger."""
