"""Optional serialization adapters for ZalgoString.

Adapters live outside the core type; each one revalidates the encoded buffer
when loading, since serialized data may come from anywhere.
"""
