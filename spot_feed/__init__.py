"""SPOT Feed Ingest.

Azure Functions workflow that polls SPOT satellite-messenger share feeds,
parses their XML payloads, and publishes fresh positions as a GeoJSON
FeatureCollection to Azure Blob Storage.
"""

__version__ = "0.1.0"
