"""WSGI handlers and router reporting job health, metrics and status."""