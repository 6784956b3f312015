import time
import requests
from ..domain.errors import UpstreamError
from .logging import get_logger

log = get_logger(__name__)

def request_json(method, url, payload=None, timeout=10, retries=2):
    """
    JSON request with retry on connection problems. 4xx answers are returned
    as-is (status, body) so the caller can show the API's error message.
    """
    for attempt in range(retries+1):
        try:
            resp = requests.request(method, url, json=payload, timeout=timeout)
            if resp.status_code >= 500:
                resp.raise_for_status()
            return resp.status_code, resp.json()
        except (requests.RequestException, ValueError) as e:
            log.warning(f"http.{method.lower()} failed attempt={attempt} url={url} err={e}")
            if attempt == retries:
                raise UpstreamError(f"request to {url} failed: {e}")
            time.sleep(0.5 * (attempt+1))

def get(url, timeout=10, retries=2):
    return request_json("GET", url, timeout=timeout, retries=retries)

def post(url, payload, timeout=30, retries=2):
    return request_json("POST", url, payload=payload, timeout=timeout, retries=retries)
