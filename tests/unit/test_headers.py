# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from netlayer.http.headers import (
    AcceptEncodingHeader,
    AcceptHeader,
    AcceptLanguageHeader,
    AuthorizationHeader,
    ConnectionHeader,
    ContentTypeHeader,
    HeaderBuilder,
    has_header,
    set_header,
)


def test_header_kinds_map_to_fixed_names():
    assert ConnectionHeader.KEEP_ALIVE.header_name == "connection"
    assert AcceptHeader.COMBINED_ALL.header_name == "accept"
    assert ContentTypeHeader.URL_ENCODED.header_name == "content-type"
    assert AcceptEncodingHeader.BR.header_name == "accept-encoding"
    assert AcceptLanguageHeader.FA.header_name == "accept-language"
    assert AuthorizationHeader.BASIC.header_name == "authorization"
    assert ContentTypeHeader.URL_ENCODED.value == "application/x-www-form-urlencoded"
    assert AcceptHeader.COMBINED_ALL.value == "application/json, text/plain, */*"


def test_builder_chains_and_last_write_wins():
    headers = (
        HeaderBuilder()
        .with_header(AcceptHeader.TEXT)
        .with_header(AcceptEncodingHeader.GZIP)
        .with_header(AcceptHeader.APPLICATION_JSON)
        .with_authorization(AuthorizationHeader.BEARER, "abc")
        .with_custom_header("X-Trace", "1")
        .build()
    )
    assert headers == {
        "accept": "application/json",
        "accept-encoding": "gzip",
        "authorization": "Bearer abc",
        "X-Trace": "1",
    }


def test_builder_is_immutable_between_chains():
    base = HeaderBuilder().with_header(ConnectionHeader.KEEP_ALIVE)
    first = base.with_header(ContentTypeHeader.APPLICATION_JSON).build()
    second = base.with_header(AcceptLanguageHeader.EN).build()

    assert base.build() == {"connection": "keep-alive"}
    assert "accept-language" not in first
    assert "content-type" not in second


def test_build_returns_fresh_copy():
    builder = HeaderBuilder().with_custom_headers({"a": "1", "b": "2"})
    built = builder.build()
    built["a"] = "changed"
    assert builder.build() == {"a": "1", "b": "2"}


def test_authorization_without_token_is_omitted():
    assert HeaderBuilder().with_authorization(AuthorizationHeader.BEARER).build() == {}
    assert HeaderBuilder().with_authorization(AuthorizationHeader.BEARER, "  ").build() == {}
    assert HeaderBuilder().with_authorization(AuthorizationHeader.BASIC, " abc ").build() == {"authorization": "Basic abc"}


def test_set_header_replaces_every_casing():
    headers = {"authorization": "Bearer old", "AUTHORIZATION": "Basic x", "accept": "*/*"}
    set_header(headers, "Authorization", "Bearer token")
    assert headers == {"accept": "*/*", "Authorization": "Bearer token"}
    assert has_header(headers, "authorization")
    assert not has_header(headers, "content-type")
