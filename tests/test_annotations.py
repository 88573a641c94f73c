from __future__ import annotations

import httpx

from volcano_explorer.annotations import (
    DESCRIPTION_MAX,
    Annotation,
    AnnotationTracker,
    UniProtClient,
    parse_uniprot_entry,
)


def _payload(name="Cellular tumor antigen p53", function="Acts as a tumor suppressor."):
    return {
        "results": [
            {
                "proteinDescription": {"recommendedName": {"fullName": {"value": name}}},
                "comments": [
                    {"commentType": "SUBUNIT", "texts": [{"value": "ignored"}]},
                    {"commentType": "FUNCTION", "texts": [{"value": function}]},
                ],
            }
        ]
    }


def _client(handler) -> UniProtClient:
    return UniProtClient(client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_parse_entry():
    ann = parse_uniprot_entry(_payload())
    assert ann == Annotation("Cellular tumor antigen p53", "Acts as a tumor suppressor.")
    assert ann.text().startswith("Cellular tumor antigen p53: ")
    assert parse_uniprot_entry({"results": []}) is None
    assert parse_uniprot_entry(None) is None


def test_long_function_text_is_truncated():
    ann = parse_uniprot_entry(_payload(function="x" * 500))
    assert len(ann.description) == DESCRIPTION_MAX + 1
    assert ann.description.endswith("…")


def test_describe_queries_once_and_caches():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=_payload())

    client = _client(handler)
    first = client.describe("TP53")
    second = client.describe(" TP53 ")
    assert first == second
    assert first.protein_name == "Cellular tumor antigen p53"
    assert len(calls) == 1
    assert calls[0].url.params["query"] == "(gene:TP53)"
    assert calls[0].url.params["format"] == "json"


def test_failures_resolve_to_none_and_are_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(503)
        return httpx.Response(200, json=_payload(name="EGFR receptor"))

    client = _client(handler)
    assert client.describe("EGFR") is None
    assert client.describe("EGFR").protein_name == "EGFR receptor"
    assert client.describe("EGFR").protein_name == "EGFR receptor"
    assert len(calls) == 2


def test_empty_result_is_cached_as_miss():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"results": []})

    client = _client(handler)
    assert client.describe("NOPE1") is None
    assert client.describe("NOPE1") is None
    assert len(calls) == 1


def test_close_only_closes_owned_client():
    owned = UniProtClient(timeout=1.0)
    owned.close()
    assert owned._client.is_closed

    injected = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    with UniProtClient(client=injected):
        pass
    assert not injected.is_closed
    injected.close()


def test_transport_error_and_bad_json():
    def broken(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    assert _client(broken).describe("MYC") is None

    def garbage(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"not json")

    assert _client(garbage).describe("MYC") is None


def test_blank_key_makes_no_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("should not be called")

    assert _client(handler).describe("   ") is None


def test_tracker_discards_stale_results():
    tracker = AnnotationTracker()
    first = tracker.focus("TP53")
    second = tracker.focus("EGFR")
    assert not tracker.apply(first, Annotation("p53"))
    assert tracker.current is None
    assert tracker.apply(second, Annotation("EGFR receptor"))
    assert tracker.current.protein_name == "EGFR receptor"
    tracker.clear()
    assert not tracker.apply(second, Annotation("late"))
