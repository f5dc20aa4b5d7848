from .loader import RequestsResourceLoader  # noqa
