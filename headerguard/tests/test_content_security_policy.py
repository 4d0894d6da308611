import asyncio

import pytest
from starlette.responses import Response

from headerguard.exceptions import ConfigurationError, InvalidDirectiveError
from headerguard.middlewares.content_security_policy import (
    DEFAULT_DIRECTIVES,
    DirectiveCompiler,
    content_security_policy,
    get_default_directives,
    normalize_directive_name,
)

DEFAULT_POLICY = (
    "default-src 'self';base-uri 'self';block-all-mixed-content;"
    "font-src 'self' https: data:;frame-ancestors 'self';img-src 'self' data:;"
    "object-src 'none';script-src 'self';script-src-attr 'none';"
    "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
)


def compile_policy(compiler, request, response=None):
    return asyncio.run(compiler.compile(request, response or Response("ok")))


def apply(handler, request, response=None):
    response = response or Response("ok")
    asyncio.run(handler(request, response))
    return response


# ─── Construction ──────────────────────────────────────────────────────────────
@pytest.mark.parametrize("directives", [None, False, {}])
def test_defaults_untouched(request_factory, directives):
    assert compile_policy(DirectiveCompiler(directives), request_factory()) == DEFAULT_POLICY


@pytest.mark.parametrize("raw,expected", [
    ("defaultSrc", "default-src"),
    ("default_src", "default-src"),
    ("default-src", "default-src"),
    ("scriptSrcAttr", "script-src-attr"),
    ("upgradeInsecureRequests", "upgrade-insecure-requests"),
])
def test_normalize_directive_name(raw, expected):
    assert normalize_directive_name(raw) == expected


def test_overrides_keep_their_default_position(request_factory):
    compiler = DirectiveCompiler({"imgSrc": ["'self'", "cdn.example.com"]})
    names = list(compiler.directives)
    assert names == list(DEFAULT_DIRECTIVES)
    assert "img-src 'self' cdn.example.com;object-src" in compile_policy(compiler, request_factory())


def test_new_directives_are_appended_in_order(request_factory):
    compiler = DirectiveCompiler({"workerSrc": "'self'", "connect_src": ["'self'", "api.example.com"]})
    assert list(compiler.directives)[-2:] == ["worker-src", "connect-src"]
    assert compile_policy(compiler, request_factory()).endswith(
        "upgrade-insecure-requests;worker-src 'self';connect-src 'self' api.example.com"
    )


def test_later_spelling_overwrites_earlier_in_place(request_factory):
    compiler = DirectiveCompiler(
        {"fooSrc": "a", "bar-src": "b", "foo-src": "c"}, use_defaults=False
    )
    assert compile_policy(compiler, request_factory()) == "foo-src c;bar-src b"


def test_false_removes_a_default(request_factory):
    compiler = DirectiveCompiler({"upgradeInsecureRequests": False, "block_all_mixed_content": False})
    policy = compile_policy(compiler, request_factory())
    assert "upgrade-insecure-requests" not in policy
    assert "block-all-mixed-content" not in policy
    assert policy.endswith("style-src 'self' https: 'unsafe-inline'")


def test_false_for_unknown_directive_is_ignored(request_factory):
    compiler = DirectiveCompiler({"sandbox": False})
    assert compile_policy(compiler, request_factory()) == DEFAULT_POLICY


def test_without_defaults(request_factory):
    compiler = DirectiveCompiler(
        {"defaultSrc": ["'self'"], "sandbox": [], "upgrade-insecure-requests": True},
        use_defaults=False,
    )
    assert compile_policy(compiler, request_factory()) == "default-src 'self';sandbox;upgrade-insecure-requests"


def test_empty_policy_sends_no_header(request_factory):
    compiler = DirectiveCompiler({}, use_defaults=False)
    assert compile_policy(compiler, request_factory()) is None

    handler = content_security_policy({"useDefaults": False})
    response = apply(handler, request_factory())
    assert "content-security-policy" not in response.headers


def test_directive_map_is_read_only():
    compiler = DirectiveCompiler()
    with pytest.raises(TypeError):
        compiler.directives["default-src"] = ("'none'",)
    assert get_default_directives() == dict(DEFAULT_DIRECTIVES)


@pytest.mark.parametrize("directives,match", [
    ({"": "'self'"}, "invalid directive name"),
    ({"default src": "'self'"}, "invalid directive name"),
    ({"default;src": "'self'"}, "invalid directive name"),
    ({1: "'self'"}, "invalid options"),
    ({"defaultSrc": 42}, 'invalid value type for "default-src"'),
    ({"defaultSrc": {"self": True}}, 'invalid value type for "default-src"'),
    ({"defaultSrc": ["'self'", 42]}, 'invalid directive value for "default-src"'),
    ({"defaultSrc": "a;b"}, 'invalid directive value for "default-src"'),
    ({"defaultSrc": ["'self'", "a,b"]}, 'invalid directive value for "default-src"'),
    ({"defaultSrc": ["'self'", ""]}, 'invalid directive value for "default-src"'),
])
def test_rejects_malformed_directives_at_construction(directives, match):
    with pytest.raises(ConfigurationError, match=match):
        content_security_policy({"directives": directives})


def test_rejects_unknown_options():
    with pytest.raises(ConfigurationError, match="Content-Security-Policy received invalid options"):
        content_security_policy({"directives": {}, "reportUri": "/csp"})
    with pytest.raises(ConfigurationError):
        content_security_policy({"directives": True})
    with pytest.raises(ConfigurationError, match="must be a mapping"):
        content_security_policy("default-src 'self'")


# ─── Serialization ─────────────────────────────────────────────────────────────
def test_callables_are_resolved_on_every_request(request_factory):
    calls = []

    def nonce(request, response):
        calls.append(request.url.path)
        return f"'nonce-{len(calls)}'"

    compiler = DirectiveCompiler({"scriptSrc": ["'self'", nonce]}, use_defaults=False)

    assert compile_policy(compiler, request_factory("/a")) == "script-src 'self' 'nonce-1'"
    assert compile_policy(compiler, request_factory("/b")) == "script-src 'self' 'nonce-2'"
    assert calls == ["/a", "/b"]
    assert compiler.directives["script-src"] == ("'self'", nonce)


def test_callables_receive_the_response(request_factory):
    response = Response("ok", headers={"X-Nonce": "abc"})
    compiler = DirectiveCompiler(
        {"styleSrc": [lambda request, response: f"'nonce-{response.headers['x-nonce']}'"]},
        use_defaults=False,
    )
    assert compile_policy(compiler, request_factory(), response) == "style-src 'nonce-abc'"


def test_async_callables_are_awaited(request_factory):
    async def host(request, response):
        return request.url.hostname

    compiler = DirectiveCompiler({"connectSrc": [host]}, use_defaults=False)
    assert compile_policy(compiler, request_factory()) == "connect-src testserver"


@pytest.mark.parametrize("value", ["bad;value", "bad,value", "", "   ", None, 42])
def test_invalid_resolved_values_raise(request_factory, value):
    compiler = DirectiveCompiler({"defaultSrc": ["'self'", lambda request, response: value]})
    with pytest.raises(InvalidDirectiveError) as excinfo:
        compile_policy(compiler, request_factory())
    assert str(excinfo.value) == (
        'Content-Security-Policy received an invalid directive value for "default-src"'
    )
    assert excinfo.value.directive == "default-src"
    assert excinfo.value.status_code == 500


def test_callable_exceptions_propagate(request_factory):
    def boom(request, response):
        raise RuntimeError("nonce store unavailable")

    compiler = DirectiveCompiler({"scriptSrc": [boom]})
    with pytest.raises(RuntimeError, match="nonce store unavailable"):
        compile_policy(compiler, request_factory())


def test_reserved_characters_are_configurable(request_factory):
    compiler = DirectiveCompiler(
        {"reportTo": [lambda request, response: "a,b"]}, use_defaults=False, reserved=";"
    )
    assert compile_policy(compiler, request_factory()) == "report-to a,b"

    strict = DirectiveCompiler(
        {"reportTo": [lambda request, response: "a|b"]}, use_defaults=False, reserved=";,|"
    )
    with pytest.raises(InvalidDirectiveError):
        compile_policy(strict, request_factory())


# ─── Handler ───────────────────────────────────────────────────────────────────
def test_handler_writes_the_header(request_factory):
    response = apply(content_security_policy(), request_factory())
    assert response.headers["content-security-policy"] == DEFAULT_POLICY


def test_report_only(request_factory):
    handler = content_security_policy({"reportOnly": True})
    response = apply(handler, request_factory())
    assert handler.header_name == "Content-Security-Policy-Report-Only"
    assert response.headers["content-security-policy-report-only"] == DEFAULT_POLICY
    assert "content-security-policy" not in response.headers


def test_handler_writes_nothing_on_invalid_value(request_factory):
    handler = content_security_policy({
        "directives": {"defaultSrc": ["'self'", lambda request, response: "bad;value"]},
    })
    response = Response("ok")
    with pytest.raises(InvalidDirectiveError):
        asyncio.run(handler(request_factory(), response))
    assert "content-security-policy" not in response.headers
