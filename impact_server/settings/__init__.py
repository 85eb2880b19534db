"""
Settings package for impact_server.

The active module is chosen by the ENVIRONMENT variable
(development, production or test).
"""
from decouple import config

ENVIRONMENT = config('ENVIRONMENT', default='development')

if ENVIRONMENT == 'production':
    from .production import *
elif ENVIRONMENT == 'test':
    from .test import *
else:
    from .development import *
