"""NetPulse: operator console for a remote network-issue prediction service."""
