from typing import Optional


class B2Error(Exception):
  """General exception type when interacting with the B2 API."""
  pass


class AuthorizationError(B2Error):
  """Raised when a call needs an authorized client but none is available."""
  pass


class ValidationError(B2Error):
  """Raised when local input is rejected before anything is sent."""
  pass


class ApiError(B2Error):
  """The B2 API answered with a non-success status code."""

  def __init__(self,
               status: int,
               code: Optional[str],
               message: str,
               url: str = None,
               body: str = None):
    self.status = status
    self.code = code
    self.message = message
    self.url = url
    # Raw response text
    self.body = body
    super().__init__(
        'Received status code {0} making request to url {1}. {2}: {3}'.format(
            status, url, code, message))
