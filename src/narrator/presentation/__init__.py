"""Presentation layer: console UI, headless UI and debug console."""
