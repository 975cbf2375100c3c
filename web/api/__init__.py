"""API views - thin async functions over the container's services."""
