"""Persistence replicas: the local snapshot store and the remote document store."""
