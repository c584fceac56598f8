"""HTTP primitives: request, headers, query string, and the response writer."""
