"""Bootstrap: database engine and processor wiring."""
