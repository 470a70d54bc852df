"""
Service layer abstraction.

Each service encapsulates business logic for a domain and talks to the
SQLite database defined in ``core.db``.  API handlers only translate
between HTTP and service calls.
"""
