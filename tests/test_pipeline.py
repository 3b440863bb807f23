import pytest

from email_extractor.clients.base_client import BaseLLMClient
from email_extractor.errors import ExternalServiceError, InputError
from email_extractor.extraction.dispatcher import BatchDispatcher
from email_extractor.pipeline import ExtractionPipeline
from email_extractor.schema import ExtractionFailure, ExtractionSuccess


class DummyLLM(BaseLLMClient):
    """Serves raw model responses per URL through the real parsing path"""

    def __init__(self, raw_by_url):
        self.raw_by_url = raw_by_url
        self.prompts = []

    async def _call_llm(self, prompt, response_model):
        self.prompts.append(prompt)
        for url, raw in self.raw_by_url.items():
            if f'"{url}"' in prompt:
                if isinstance(raw, Exception):
                    raise raw
                return raw
        return None


def make_pipeline(raw_by_url):
    client = DummyLLM(raw_by_url)
    return ExtractionPipeline(BatchDispatcher(client)), client


@pytest.mark.asyncio
async def test_process_url_success():
    pipeline, _ = make_pipeline({
        "https://company.com": '{"emails": ["a@b.com", "not-an-email", "c@d.com"]}'
    })

    run = await pipeline.process_url("https://company.com")

    assert run.status == "settled"
    assert run.source_name == "https://company.com"
    assert run.results == {"https://company.com": ExtractionSuccess(emails=["a@b.com", "c@d.com"])}
    assert run.total_emails == 2
    assert run.duration_seconds is not None


@pytest.mark.asyncio
async def test_process_url_failure_is_captured():
    pipeline, _ = make_pipeline({"https://down.com": ConnectionError("timeout")})

    run = await pipeline.process_url("https://down.com")

    outcome = run.results["https://down.com"]
    assert isinstance(outcome, ExtractionFailure)
    assert outcome.message == "Failed to extract emails. AI API error: timeout"
    assert run.failure_count == 1


@pytest.mark.asyncio
async def test_process_url_rejects_blank_input():
    pipeline, client = make_pipeline({})

    with pytest.raises(InputError):
        await pipeline.process_url("   ")

    assert client.prompts == []


@pytest.mark.asyncio
async def test_process_csv_mixed_outcomes(tmp_path):
    csv_path = tmp_path / "sites.csv"
    csv_path.write_text(
        'website,name\n"https://good.com",Good\nhttps://bad.com,Bad\nhttps://empty.com,Empty\n',
        encoding="utf-8",
    )
    pipeline, client = make_pipeline({
        "https://good.com": '{"emails": ["x@y.com"]}',
        "https://bad.com": ExternalServiceError("service unavailable"),
        "https://empty.com": "",
    })

    run = await pipeline.process_csv(csv_path)

    assert run.source_name == "sites.csv"
    assert run.urls == ["https://good.com", "https://bad.com", "https://empty.com"]
    assert run.results == {
        "https://good.com": ExtractionSuccess(emails=["x@y.com"]),
        "https://bad.com": ExtractionFailure(message="service unavailable"),
        "https://empty.com": ExtractionSuccess(emails=[]),
    }
    assert len(client.prompts) == 3
    assert run.success_count == 2


@pytest.mark.asyncio
async def test_process_csv_duplicate_urls_collapse(tmp_path):
    csv_path = tmp_path / "dupes.csv"
    csv_path.write_text("https://a.com\nhttps://a.com\n", encoding="utf-8")
    pipeline, client = make_pipeline({"https://a.com": '{"emails": ["a@a.com"]}'})

    run = await pipeline.process_csv(csv_path)

    assert len(client.prompts) == 2
    assert list(run.results) == ["https://a.com"]


@pytest.mark.asyncio
async def test_process_csv_input_errors_stop_before_dispatch(tmp_path):
    csv_path = tmp_path / "empty.csv"
    csv_path.write_text("name\nfoo\n", encoding="utf-8")
    pipeline, client = make_pipeline({})

    with pytest.raises(InputError, match="No valid URLs found"):
        await pipeline.process_csv(csv_path)

    with pytest.raises(InputError, match="Invalid file type"):
        await pipeline.process_csv(tmp_path / "sites.xlsx")

    assert client.prompts == []


@pytest.mark.asyncio
async def test_each_run_gets_a_fresh_result_map():
    pipeline, _ = make_pipeline({
        "https://a.com": '{"emails": ["a@a.com"]}',
        "https://b.com": '{"emails": ["b@b.com"]}',
    })

    first = await pipeline.process_url("https://a.com")
    second = await pipeline.process_url("https://b.com")

    assert list(first.results) == ["https://a.com"]
    assert list(second.results) == ["https://b.com"]


@pytest.mark.asyncio
async def test_settled_run_cannot_be_settled_again():
    pipeline, _ = make_pipeline({"https://a.com": '{"emails": []}'})

    run = await pipeline.process_url("https://a.com")

    with pytest.raises(RuntimeError):
        run.settle({})
