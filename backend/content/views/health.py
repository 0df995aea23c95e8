import resource
import sys
import time

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

_STARTED = time.monotonic()


def _max_rss_bytes() -> int:
    rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is KiB on Linux, bytes on macOS.
    return rss if sys.platform == "darwin" else rss * 1024


@require_http_methods(["GET"])
def health(request) -> JsonResponse:
    return JsonResponse(
        {
            "status": "ok",
            "uptime_seconds": round(time.monotonic() - _STARTED, 3),
            "max_rss_bytes": _max_rss_bytes(),
        }
    )
