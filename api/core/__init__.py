"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every resource uses: the database
handle, settings, error taxonomy, response envelope, SQL helpers and the
schema. Resource-specific SQL and rules stay in the resource package
(e.g. `tasks/`).
"""
