"""Content tree projection, routing and navigation."""
