"""Content catalog admin: repositories and services over the hosted backend."""
