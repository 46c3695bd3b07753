"""Service layer — compile, validate, bootstrap, and describe the server."""
