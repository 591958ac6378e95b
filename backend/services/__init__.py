"""
Service layer for business logic.

Services are constructed per request from a ``RequestContext`` and own the
transaction boundaries of the operations they expose.
"""
