"""Smoke probe that checks a running gate from the outside."""
