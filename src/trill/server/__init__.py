"""Server — ASGI template server, response sending and error mapping."""
