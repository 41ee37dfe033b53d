"""BehtarZindagi storefront gateway — FastAPI proxy in front of the behtarzindagi.in API."""
