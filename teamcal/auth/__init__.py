"""Session identity and password hashing"""
