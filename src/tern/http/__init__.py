"""HTTP request/response collaborators used by the media layer."""
