"""Appointment booking backend for a single-chair barbershop."""
