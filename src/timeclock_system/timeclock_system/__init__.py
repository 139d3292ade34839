"""Timeclock back office package.

Organized by feature modules (timeclock, reports, corrections, pins, kiosk,
...) with a thin Flask JSON controller layer over service/repository layers.
"""
