import pytest

import httpfacade


def test_hierarchy():
    assert issubclass(httpfacade.TransportError, httpfacade.HTTPFacadeError)
    assert issubclass(httpfacade.RequestReusedError, httpfacade.HTTPFacadeError)
    assert issubclass(httpfacade.RequestReusedError, RuntimeError)


def test_transport_error_attributes():
    exc = httpfacade.TransportError("Could not resolve host", 6)
    assert exc.message == "Could not resolve host"
    assert exc.code == 6
    assert exc.url is None
    assert str(exc) == "[6] Could not resolve host"


def test_transport_error_is_catchable_as_base():
    with pytest.raises(httpfacade.HTTPFacadeError):
        raise httpfacade.TransportError("boom", 2, url="http://x")
