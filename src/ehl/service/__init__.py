"""HTTP service and command-line client."""
