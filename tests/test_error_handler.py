from src.catalog.errors import DecodeError, FetchError
from src.error_handler import ErrorHandler


def test_handle_exception_returns_failure():
    eh = ErrorHandler()
    out = eh.handle_exception(Exception("boom"), context={"k": "v"})
    assert out.error_type == "Exception"
    assert "internal error" in out.message.lower()
    assert "boom" in out.metadata["error"]
    assert out.metadata["context"] == {"k": "v"}


def test_decode_and_fetch_failures_are_classified():
    eh = ErrorHandler()

    decode = eh.handle_exception(DecodeError("not an array"))
    fetch = eh.handle_exception(FetchError("https://x.test/product.json", "HTTP 500", status_code=500))

    assert decode.error_type == "DecodeError"
    assert decode.retryable is False
    assert "malformed" in decode.message
    assert fetch.error_type == "FetchError"
    assert fetch.retryable is True
    assert "HTTP 500" in fetch.metadata["error"]
