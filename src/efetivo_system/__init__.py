"""Efetivo package.

Tracks personnel absences and daily staff availability. Organized by feature
modules (personnel, absences, availability, users) with a thin Flask
controller layer over service/repository layers.
"""
