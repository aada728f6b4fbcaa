"""edgeflow: connection routing and path segments for node-graph editors."""

__version__ = "0.1.0"
