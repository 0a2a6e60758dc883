"""Telemetry: audit trail of install decisions and operational logging."""
