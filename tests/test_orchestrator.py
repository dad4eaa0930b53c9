"""
Tests for batch orchestration and full seeding runs.
"""

from pathlib import Path

import pytest

from vdp_seeder.errors import CapabilityInitError
from vdp_seeder.models import SiteDescriptor, SiteState
from vdp_seeder.orchestrator import BatchOrchestrator, run_seeder

from tests.conftest import BLOCKED_HTML, HOMEPAGE_HTML, PRIMARY_PATH, FakeFetcher, urlset


def site(base_url: str, label: str = "UNK") -> SiteDescriptor:
    return SiteDescriptor(base_url=base_url, label=label)


def serve_feed(fetcher: FakeFetcher, base: str, *locs: str):
    """Homepage plus a primary inventory feed."""
    fetcher.add(base, HOMEPAGE_HTML)
    fetcher.add(base + PRIMARY_PATH, urlset(*locs))


class FailingFetcher(FakeFetcher):
    """Fetch capability that cannot be started."""

    async def start(self):
        self.started += 1
        raise CapabilityInitError("Failed to initialize browser: no executable")


class TestBatchOrchestrator:
    """Test per-site isolation, ordering and pacing."""

    async def test_records_keep_input_order_and_drop_failures(self, config, fetcher, sleep):
        """Test records follow input order with failed sites removed."""
        serve_feed(fetcher, "https://a.example.com", "https://a.example.com/vdp/1")
        fetcher.add("https://b.example.com", BLOCKED_HTML)
        serve_feed(fetcher, "https://c.example.com", "https://c.example.com/vdp/3")

        orchestrator = BatchOrchestrator(config, fetcher, sleep=sleep)
        report = await orchestrator.run([
            site("https://a.example.com", "A"),
            site("https://b.example.com", "B"),
            site("https://c.example.com", "C"),
        ])

        assert report.total_sites == 3
        assert report.succeeded_count == 2
        assert [r.to_line() for r in report.records] == [
            "https://a.example.com/vdp/1|A",
            "https://c.example.com/vdp/3|C",
        ]
        assert [(f.site.label, f.kind) for f in report.failures] == [("B", "blocked")]

    async def test_blocked_site_does_not_stop_batch(self, config, fetcher, sleep):
        fetcher.add("https://blocked.example.com", BLOCKED_HTML)
        serve_feed(fetcher, "https://ok.example.com", "https://ok.example.com/vdp/1")

        report = await BatchOrchestrator(config, fetcher, sleep=sleep).run([
            site("https://blocked.example.com"),
            site("https://ok.example.com"),
        ])

        assert report.summary() == "1/2"
        assert "https://ok.example.com" in fetcher.calls

    async def test_empty_feed_is_a_failure(self, config, fetcher, sleep):
        """Test a feed with no loc entries yields no record."""
        fetcher.add("https://e.example.com", HOMEPAGE_HTML)
        fetcher.add("https://e.example.com" + PRIMARY_PATH, "<urlset></urlset>")

        report = await BatchOrchestrator(config, fetcher, sleep=sleep).run([site("https://e.example.com")])

        assert report.records == []
        assert report.failures[0].kind == "empty_feed"

    async def test_not_found_and_fetch_errors(self, config, fetcher, sleep):
        fetcher.add("https://n.example.com", HOMEPAGE_HTML)
        fetcher.fail("https://down.example.com")

        report = await BatchOrchestrator(config, fetcher, sleep=sleep).run([
            site("https://n.example.com"),
            site("https://down.example.com"),
        ])

        assert [f.kind for f in report.failures] == ["not_found", "fetch"]

    async def test_unexpected_error_is_isolated(self, config, fetcher, sleep):
        """Test a bug-level exception on one site is contained."""

        class ExplodingExtractor:
            def extract(self, feed):
                raise ValueError("bad feed")

        serve_feed(fetcher, "https://x.example.com", "https://x.example.com/vdp/1")

        report = await BatchOrchestrator(
            config, fetcher, extractor=ExplodingExtractor(), sleep=sleep
        ).run([site("https://x.example.com"), site("https://y.example.com")])

        assert report.succeeded_count == 0
        assert [f.kind for f in report.failures] == ["unexpected", "not_found"]

    async def test_delay_after_every_site(self, config, fetcher, sleep):
        """Test the politeness delay runs once per site, success or failure."""
        delayed = config.model_copy(update={"delay_seconds": 3})
        serve_feed(fetcher, "https://a.example.com", "https://a.example.com/vdp/1")

        await BatchOrchestrator(delayed, fetcher, sleep=sleep).run([
            site("https://a.example.com"),
            site("https://b.example.com"),
        ])

        assert sleep.delays == [3, 3]

    async def test_zero_delay_skips_sleep(self, config, fetcher, sleep):
        await BatchOrchestrator(config, fetcher, sleep=sleep).run([site("https://a.example.com")])
        assert sleep.delays == []

    async def test_no_retry(self, config, fetcher, sleep):
        """Test a failed site's homepage is fetched exactly once."""
        fetcher.fail("https://a.example.com")

        await BatchOrchestrator(config, fetcher, sleep=sleep).run([site("https://a.example.com")])

        assert fetcher.calls.count("https://a.example.com") == 1

    async def test_one_session_per_site(self, config, fetcher, sleep):
        """Test every site gets its own session, closed whether it succeeds or fails."""
        serve_feed(fetcher, "https://a.example.com", "https://a.example.com/vdp/1")
        fetcher.add("https://b.example.com", BLOCKED_HTML)
        fetcher.fail("https://c.example.com")

        await BatchOrchestrator(config, fetcher, sleep=sleep).run([
            site("https://a.example.com"),
            site("https://b.example.com"),
            site("https://c.example.com"),
        ])

        assert fetcher.sessions == [
            "https://a.example.com",
            "https://b.example.com",
            "https://c.example.com",
        ]
        assert fetcher.open_sessions == 0

    async def test_states_end_done(self, config, fetcher, sleep):
        orchestrator = BatchOrchestrator(config, fetcher, sleep=sleep)

        await orchestrator.run([site("https://a.example.com"), site("https://b.example.com")])

        assert orchestrator.states == [SiteState.DONE, SiteState.DONE]

    async def test_state_during_delay(self, config, fetcher):
        """Test a site is DELAYING while the pause runs and later sites are PENDING."""
        delayed = config.model_copy(update={"delay_seconds": 1})
        seen = []

        async def observe(seconds):
            seen.append(list(orchestrator.states))

        orchestrator = BatchOrchestrator(delayed, fetcher, sleep=observe)
        await orchestrator.run([site("https://a.example.com"), site("https://b.example.com")])

        assert seen == [
            [SiteState.DELAYING, SiteState.PENDING],
            [SiteState.DONE, SiteState.DELAYING],
        ]


class TestRunSeeder:
    """End-to-end runs through files."""

    def _write_sites(self, config, text: str):
        Path(config.input_file).write_text(text, encoding="utf-8")

    async def test_single_site_end_to_end(self, config, fetcher, sleep):
        """Test the primary feed's first VDP lands in the output file."""
        self._write_sites(config, "https://example.com|FORD\n")
        fetcher.add("https://example.com", HOMEPAGE_HTML)
        fetcher.add(
            "https://example.com" + PRIMARY_PATH,
            "<urlset><url><loc>https://example.com/vdp/123</loc></url></urlset>",
        )

        report = await run_seeder(config, fetcher=fetcher, sleep=sleep)

        assert report.summary() == "1/1"
        assert Path(config.output_file).read_text(encoding="utf-8") == "https://example.com/vdp/123|FORD"

    async def test_blocked_site_excluded(self, config, fetcher, sleep):
        self._write_sites(config, "https://blocked.example.com|A\nhttps://ok.example.com|B\n")
        fetcher.add("https://blocked.example.com", BLOCKED_HTML)
        serve_feed(fetcher, "https://ok.example.com", "https://ok.example.com/vdp/9")

        report = await run_seeder(config, fetcher=fetcher, sleep=sleep)

        assert report.summary() == "1/2"
        assert Path(config.output_file).read_text(encoding="utf-8") == "https://ok.example.com/vdp/9|B"

    async def test_all_fail_writes_nothing(self, config, fetcher, sleep):
        """Test no output file when every site fails discovery."""
        self._write_sites(config, "\n".join([
            "https://a.example.com|A",
            "https://b.example.com|B",
            "https://c.example.com|C",
        ]))
        for base in ("https://a.example.com", "https://b.example.com", "https://c.example.com"):
            fetcher.add(base, HOMEPAGE_HTML)

        report = await run_seeder(config, fetcher=fetcher, sleep=sleep)

        assert report.summary() == "0/3"
        assert not Path(config.output_file).exists()

    async def test_all_fail_leaves_previous_output(self, config, fetcher, sleep):
        """Test a run with nothing to write doesn't touch an older file."""
        self._write_sites(config, "https://a.example.com\n")
        output = Path(config.output_file)
        output.parent.mkdir(parents=True)
        output.write_text("old|UNK", encoding="utf-8")

        await run_seeder(config, fetcher=fetcher, sleep=sleep)

        assert output.read_text(encoding="utf-8") == "old|UNK"

    async def test_fetcher_acquired_and_released_once(self, config, fetcher, sleep):
        self._write_sites(config, "https://a.example.com\nhttps://b.example.com\n")

        await run_seeder(config, fetcher=fetcher, sleep=sleep)

        assert fetcher.started == 1
        assert fetcher.stopped == 1

    async def test_fetcher_released_on_interrupt(self, config, fetcher):
        """Test cleanup runs when the batch is interrupted."""
        self._write_sites(config, "https://a.example.com\n")
        delayed = config.model_copy(update={"delay_seconds": 1})

        async def interrupt(seconds):
            raise RuntimeError("interrupted")

        with pytest.raises(RuntimeError, match="interrupted"):
            await run_seeder(delayed, fetcher=fetcher, sleep=interrupt)

        assert fetcher.stopped == 1
        assert not Path(config.output_file).exists()

    async def test_init_failure_aborts_before_sites(self, config, sleep):
        """Test a fetch backend that can't start is fatal."""
        self._write_sites(config, "https://a.example.com\n")
        failing = FailingFetcher(config)

        with pytest.raises(CapabilityInitError):
            await run_seeder(config, fetcher=failing, sleep=sleep)

        assert failing.calls == []
        assert not Path(config.output_file).exists()

    async def test_empty_site_list(self, config, fetcher, sleep):
        """Test a list with no valid lines never starts the fetcher."""
        self._write_sites(config, "# nothing here\nexample.com\n")

        report = await run_seeder(config, fetcher=fetcher, sleep=sleep)

        assert report.summary() == "0/0"
        assert fetcher.started == 0
        assert not Path(config.output_file).exists()

    async def test_missing_site_list(self, config, fetcher, sleep):
        with pytest.raises(FileNotFoundError):
            await run_seeder(config, fetcher=fetcher, sleep=sleep)
