"""Secret provider adapters.

Each adapter implements SecretProviderProtocol for one backend family and is
instantiated by ProviderFactory from a provider URI.
"""
