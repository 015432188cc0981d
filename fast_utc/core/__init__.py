"""
Core value types, integer primitives, configuration and contracts.

This module contains the foundational building blocks. The only link to
the time source is Timestamp.now(), which reads fast_utc.clock.
"""
