import json
from typing import Any, Dict, Optional

import pytest
import requests

RESULTS_HTML = """
<html>
  <head><title>Cheltenham 14:30 Result</title></head>
  <body>
    <table class="results-table">
      <tr>
        <td class="finishing-position">1</td>
        <td class="horse-name">  Thunder Bolt \n</td>
        <td class="jockey-name">J. Smith</td>
        <td class="trainer-name">T. Jones</td>
      </tr>
      <tr>
        <td class="finishing-position">2</td>
        <td class="horse-name">Silver Arrow</td>
        <td class="jockey-name">A. Lee</td>
        <td class="trainer-name">B. Wong</td>
      </tr>
    </table>
  </body>
</html>
"""


def make_response(text: str = "", status_code: int = 200, payload: Any = None,
                  content_type: str = "text/html; charset=utf-8", body: Optional[bytes] = None) -> requests.Response:
    """Build a real requests.Response the way the HTTP adapter would."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = "https://example.com/"
    if payload is not None:
        body = json.dumps(payload).encode("utf-8")
        content_type = "application/json"
    resp._content = body if body is not None else text.encode("utf-8")
    resp.headers["Content-Type"] = content_type
    resp.encoding = requests.utils.get_encoding_from_headers(resp.headers)
    return resp


class DummySession:
    def __init__(self, response: Optional[requests.Response] = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[Dict[str, Any]] = []

    def get(self, url: str, params=None, headers=None, timeout=None) -> requests.Response:
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def results_html() -> str:
    return RESULTS_HTML
