"""
es_atompub – Atom/RFC 5005 publisher for an append-only event store.

Import path convention::

    from es_atompub.feed import FeedAssembler, CachePolicy
    from es_atompub.security.encryption import EnvelopeCipher
    from es_atompub.application import FeedResourceHandlers
    from es_atompub.adapters.fastapi import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
