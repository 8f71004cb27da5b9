from django.utils.deprecation import MiddlewareMixin
from rest_framework.renderers import JSONRenderer
from apps.api.validation import validate_request_context
from apps.common import get_logger

logger = get_logger(__name__).bind(component='api', layer='middleware')


def _render(request, response):
    # The response leaves before DRF content negotiation runs
    response.accepted_renderer = JSONRenderer()
    response.accepted_media_type = 'application/json'
    response.renderer_context = {'request': request, 'response': response}
    response.render()
    return response


class RequestValidationMiddleware(MiddlewareMixin):
    """
    Runs authentication and ownership checks for class based API views before
    the view executes. Function views (health probes, admin) pass through.
    """

    def process_view(self, request, view_func, view_args, view_kwargs):
        view_class = getattr(view_func, 'view_class', None)
        if view_class is None:
            return None
        view_name = view_class.__name__
        method = getattr(request, 'method', None)
        logger.debug('Validating request context', view=view_name, method=method, path=request.path)
        response = validate_request_context(request, view_class, view_kwargs)
        if response is None:
            return None
        logger.info(
            'Request blocked by validation',
            view=view_name,
            method=method,
            path=request.path,
            status=response.status_code,
        )
        return _render(request, response)
