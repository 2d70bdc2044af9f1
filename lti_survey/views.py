"""
LTI survey launch endpoint.
"""
import logging

from django.http import HttpResponseRedirect
from django.shortcuts import render
from django.views.decorators.clickjacking import xframe_options_exempt
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from lti_survey.api import launch_survey
from lti_survey.data import LaunchRequest
from lti_survey.exceptions import LtiError
from lti_survey.utils import get_launch_base_url

log = logging.getLogger(__name__)


def get_signed_launch_url(request):
    """
    Returns the URL the consumer signed the launch against.

    This is the absolute URL of the request, with scheme and host replaced by
    LTI_SURVEY_BASE_URL_OVERRIDE when the site runs behind a proxy.
    """
    base_url = get_launch_base_url()
    if base_url:
        return base_url.rstrip('/') + request.get_full_path()
    return request.build_absolute_uri()


@require_http_methods(["POST"])
@xframe_options_exempt
@csrf_exempt
def lti_launch_endpoint(request, survey_id):
    """
    Receives an LTI 1.1 basic launch for a survey and redirects the browser
    into the participant's survey session.

    The consumer platform posts the signed form directly from the browser,
    so the request carries no session or CSRF token.
    """
    launch_request = LaunchRequest(
        url=get_signed_launch_url(request),
        params=request.POST.dict(),
        body_items=[(key, value) for key, values in request.POST.lists() for value in values],
        http_method=request.method,
    )

    try:
        redirect_target = launch_survey(survey_id, launch_request)
    except LtiError as exc:
        log.info("LTI launch of survey %s failed: %s", survey_id, exc.message)
        return render(
            request,
            'html/lti_launch_error.html',
            context={"error_msg": exc.message},
            status=exc.http_status,
        )

    return HttpResponseRedirect(request.build_absolute_uri(redirect_target.url))
