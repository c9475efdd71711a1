"""Phonebook API Package — CRUD REST service over phonebook entries.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
