"""Core reconciliation logic for nsprune.

Name matching, volume naming, classification and the reconciliation engine.
"""
