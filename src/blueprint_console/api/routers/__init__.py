"""Routers mounted by the console application factory."""
