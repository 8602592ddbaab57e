"""Services behind the REST routes: child URIs, resolution, errors and metrics."""
