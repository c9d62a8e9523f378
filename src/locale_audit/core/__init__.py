"""Reconciliation core: key extraction, locale store, scanner, engine, mutations."""
