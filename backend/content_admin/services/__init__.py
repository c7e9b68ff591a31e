"""
Services: CRUD layer, catalog rules, domain services and the admin session.
"""
