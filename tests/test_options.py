import pytest
from requests.cookies import RequestsCookieJar

from unifi_api_client import RequestOptions, merge_request_options


def test_merge_later_layers_win():
    merged = merge_request_options({"a": 1, "b": 1}, None, {"b": 2}, {"c": 3})
    assert merged == {"a": 1, "b": 2, "c": 3}


def test_merge_does_not_mutate_layers():
    first = {"a": 1}
    merge_request_options(first, {"a": 2})
    assert first == {"a": 1}


def test_defaults():
    options = RequestOptions.from_config()
    assert options.verify is False
    assert isinstance(options.cookies, RequestsCookieJar)
    assert len(options.cookies) == 0
    assert dict(options.extra) == {}


def test_each_instance_gets_a_fresh_jar():
    assert RequestOptions.from_config().cookies is not RequestOptions.from_config().cookies


def test_verify_path_is_kept_and_cookies_still_default():
    options = RequestOptions.from_config({"verify": "/path/cert.pem"})
    assert options.verify == "/path/cert.pem"
    assert isinstance(options.cookies, RequestsCookieJar)


def test_caller_jar_is_used_as_is():
    jar = RequestsCookieJar()
    options = RequestOptions.from_config({"cookies": jar})
    assert options.cookies is jar


def test_passthrough_options():
    options = RequestOptions.from_config({"timeout": 5, "headers": {"X-Test": "1"}})
    assert dict(options.extra) == {"timeout": 5, "headers": {"X-Test": "1"}}


def test_options_are_immutable():
    options = RequestOptions.from_config({"timeout": 5})
    with pytest.raises(AttributeError):
        options.verify = True
    with pytest.raises(TypeError):
        options.extra["timeout"] = 10


def test_for_request_keeps_cookies_and_verify():
    options = RequestOptions.from_config({"verify": True})
    kwargs = options.for_request(json={"a": 1}, cookies="other", verify=False)
    assert kwargs["cookies"] is options.cookies
    assert kwargs["verify"] is True
    assert kwargs["json"] == {"a": 1}


def test_for_request_call_options_override_passthrough():
    options = RequestOptions.from_config({"allow_redirects": True, "timeout": 5})
    kwargs = options.for_request(allow_redirects=False)
    assert kwargs["allow_redirects"] is False
    assert kwargs["timeout"] == 5


def test_cookies_dict_becomes_a_jar():
    options = RequestOptions.from_config({"cookies": {"pref": "1"}})
    assert isinstance(options.cookies, RequestsCookieJar)
    assert options.cookies.get("pref") == "1"
