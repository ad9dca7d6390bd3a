"""Short URL microservice: sequential numeric short URLs with redirects."""

__version__ = "1.0.0"
