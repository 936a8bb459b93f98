"""Test suite for secretspec providers.

- unit/: Unit tests, no real bw/bws executables or vaults
- utils/: Fakes shared across tests (fake CLI, in-memory provider)
"""
