from .base import IntegrationPlugin
from .restapi import RestApiPlugin
