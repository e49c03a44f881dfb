"""Tests for the document_search tool."""

import asyncio

from knowledge_agent.agent.tools.document_search import (
    MATCH_THRESHOLD,
    NO_RESULTS,
    DocumentSearchTool,
)
from tests.conftest import FakeStore


def run(store, embeddings, args):
    return asyncio.run(DocumentSearchTool(store, embeddings).run(args)).output


def test_zero_matches_return_sentinel(fake_embeddings):
    out = run(FakeStore(), fake_embeddings, {"query": "refunds", "limit": 2})
    assert out == "No relevant documents found."
    assert out == NO_RESULTS


def test_calls_match_documents_with_threshold_and_limit(fake_embeddings):
    store = FakeStore()
    run(store, fake_embeddings, {"query": "refunds", "limit": 2})
    assert store.calls == [("match_documents", 1536, MATCH_THRESHOLD, 2)]


def test_default_limit_is_five(fake_embeddings):
    store = FakeStore()
    run(store, fake_embeddings, {"query": "refunds"})
    assert store.calls[0][3] == 5


def test_formats_numbered_results(fake_embeddings):
    store = FakeStore(matches=[
        {"content": "Refunds are issued within 14 days.", "similarity": 0.912},
        {"content": "Contact support for refunds.", "similarity": 0.8},
    ])
    out = run(store, fake_embeddings, {"query": "refunds", "limit": 2})
    assert out == (
        "Result 1:\nContent: Refunds are issued within 14 days.\nSimilarity: 0.91\n"
        "\n"
        "Result 2:\nContent: Contact support for refunds.\nSimilarity: 0.80\n"
    )


def test_never_returns_more_than_limit(fake_embeddings):
    store = FakeStore(matches=[{"content": f"doc {i}", "similarity": 0.9} for i in range(4)])
    out = run(store, fake_embeddings, {"query": "docs", "limit": 2})
    assert "Result 2:" in out
    assert "Result 3:" not in out


def test_remote_error_becomes_text(fake_embeddings, repository_error):
    store = FakeStore()
    store.error = repository_error
    out = run(store, fake_embeddings, {"query": "refunds"})
    assert out == "Error searching documents: connection refused"


def test_missing_query_is_rejected(fake_embeddings):
    store = FakeStore()
    out = run(store, fake_embeddings, {"limit": 3})
    assert out.startswith("Error: invalid arguments for document_search")
    assert store.calls == []
