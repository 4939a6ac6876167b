"""Lecture quiz builder API package."""
