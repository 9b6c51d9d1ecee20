"""School Management package.

Feature modules (attendance, classes, ...) with a thin Flask controller layer
over service/repository layers, plus a MongoDB connectivity probe.
"""
