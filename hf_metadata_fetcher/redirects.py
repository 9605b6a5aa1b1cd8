"""Redirect policy for hub HEAD probes.

Only relative redirects are followed. Absolute redirects point at other hosts
(the LFS CDN) and must not receive the hub bearer token, so the probe stops
at them and the redirect response itself is returned.

Same policy as huggingface_hub's ``_request_wrapper``:
https://github.com/huggingface/huggingface_hub/blob/b2c9a148d465b43ab90fab6e4ebcbbf5a9df27d4/src/huggingface_hub/file_download.py#L258
"""

import logging

import httpx

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 20


def decide_redirect(request: httpx.Request, response: httpx.Response) -> httpx.Request | None:
    """Return the request to follow for ``response``, or None to stop."""
    if not 300 <= response.status_code < 400:
        return None
    location = response.headers.get("Location")
    if not location:
        return None

    try:
        target = httpx.URL(location)
    except httpx.InvalidURL:
        logger.debug("Not following unparsable redirect %r", location)
        return None
    if target.host:
        logger.debug("Not following absolute redirect to %s", target.host)
        return None

    # Only host-relative paths keep the original host with a new path.
    if not target.path.startswith("/"):
        logger.debug("Cannot resolve relative redirect %r against %s", location, request.url)
        return None
    resolved = request.url.join(target)

    headers = httpx.Headers(request.headers)
    headers["Location"] = str(resolved)
    logger.debug("Following relative redirect %s -> %s", request.url, resolved)
    return httpx.Request(request.method, resolved, headers=headers)


def send_with_redirect_policy(
    client: httpx.Client, request: httpx.Request, max_redirects: int = MAX_REDIRECTS
) -> httpx.Response:
    """Send ``request``, following redirects only where the policy allows."""
    response = client.send(request)
    for _ in range(max_redirects):
        next_request = decide_redirect(request, response)
        if next_request is None:
            return response
        response.close()
        request = next_request
        response = client.send(request)

    if decide_redirect(request, response) is None:
        return response
    raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)
