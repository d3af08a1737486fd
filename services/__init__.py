"""Service layer.

One module per aggregate. Every function takes the SQLAlchemy session as its
first argument and raises ``utils.errors.ServiceError`` subclasses on
failure.
"""
