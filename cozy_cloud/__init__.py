"""Cozy Cloud - trips, events and a cozy journal on a hosted backend."""
