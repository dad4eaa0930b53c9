"""
Main orchestrator for the VDP seeder.
Drives sitemap discovery and VDP extraction across the site list, one site at a time.
"""

import asyncio
import time
from typing import Awaitable, Callable, List, Optional

from .browser import BaseFetcher, create_fetcher
from .errors import EmptyFeed, SeederError
from .extractors import VDPExtractor
from .locator import SitemapLocator
from .models import BatchReport, SeederConfig, SiteDescriptor, SiteFailure, SiteState, VdpRecord
from .output import ResultWriter
from .site_list import load_site_list
from .utils import init_logger, get_logger


SleepFunc = Callable[[float], Awaitable[None]]


class BatchOrchestrator:
    """
    Runs the per-site pipeline over a batch with failure isolation.

    Each site moves PENDING -> PROBING -> DELAYING -> DONE. A failure on one
    site is recorded and never stops the batch. The pause between sites goes
    through `sleep`, so tests can swap in a no-op.
    """

    def __init__(
        self,
        config: SeederConfig,
        fetcher: BaseFetcher,
        locator: Optional[SitemapLocator] = None,
        extractor: Optional[VDPExtractor] = None,
        sleep: SleepFunc = asyncio.sleep
    ):
        self.config = config
        self.fetcher = fetcher
        self.locator = locator or SitemapLocator(config)
        self.extractor = extractor or VDPExtractor()
        self.sleep = sleep
        self.logger = get_logger()

        self.states: List[SiteState] = []

    async def run(self, sites: List[SiteDescriptor]) -> BatchReport:
        """Process every site in order and aggregate the results."""
        report = BatchReport(total_sites=len(sites))
        self.states = [SiteState.PENDING] * len(sites)

        self.logger.info(f"Processing {len(sites)} site(s)...")

        for index, site in enumerate(sites):
            self.logger.print_section(f"Processing: {site.base_url}")

            self._set_state(index, SiteState.PROBING)
            try:
                record = await self.process_site(site)
                report.records.append(record)
                self.logger.success(f"Found VDP URL: {record.vdp_url}")

            except EmptyFeed as e:
                self.logger.warning(f"No VDP URLs found in sitemap: {e}")
                report.failures.append(SiteFailure(site=site, kind=e.kind, message=str(e)))

            except SeederError as e:
                self.logger.error(f"Could not seed {site.base_url}: {e}")
                report.failures.append(SiteFailure(site=site, kind=e.kind, message=str(e)))

            except Exception as e:
                self.logger.error(f"Error processing {site.base_url}: {e}", exc_info=True)
                report.failures.append(SiteFailure(site=site, kind="unexpected", message=str(e)))

            self._set_state(index, SiteState.DELAYING)
            if self.config.delay_seconds > 0:
                self.logger.info(f"Waiting {self.config.delay_seconds} seconds before next site...")
                await self.sleep(self.config.delay_seconds)

            self._set_state(index, SiteState.DONE)

        return report

    async def process_site(self, site: SiteDescriptor) -> VdpRecord:
        """
        Locate the inventory feed for one site and take its first VDP.

        Raises:
            SeederError: any per-site failure
        """
        async with self.fetcher.site_session(site.base_url):
            feed = await self.locator.locate(site, self.fetcher)

        vdp_url = self.extractor.extract(feed)
        if not vdp_url:
            raise EmptyFeed(f"{feed.source_url} lists no page locations")

        return VdpRecord(vdp_url=vdp_url, label=site.label)

    def _set_state(self, index: int, state: SiteState):
        self.states[index] = state
        self.logger.debug(f"Site {index + 1}/{len(self.states)} -> {state.value}")


async def run_seeder(
    config: SeederConfig,
    fetcher: Optional[BaseFetcher] = None,
    sleep: SleepFunc = asyncio.sleep
) -> BatchReport:
    """
    Main entry point for a seeding run.

    Args:
        config: Seeder configuration
        fetcher: Fetch capability; built from the config when omitted
        sleep: Inter-site delay function

    Returns:
        The finished BatchReport

    Raises:
        CapabilityInitError: the fetch capability could not be started
        FileNotFoundError: the site list does not exist
    """
    logger = init_logger(verbose=config.verbose, debug_log_file=config.debug_log_file)

    logger.print_header("VDP Seeder")
    logger.info(f"Input: {config.input_file}")
    logger.info(f"Output: {config.output_file}")
    logger.info(f"Engine: {config.engine.value} (headless={config.headless})")
    logger.info(f"Delay between sites: {config.delay_seconds}s")

    start_time = time.time()

    sites = load_site_list(config.input_file)

    if sites:
        fetcher = fetcher or create_fetcher(config)
        async with fetcher:
            orchestrator = BatchOrchestrator(config, fetcher, sleep=sleep)
            report = await orchestrator.run(sites)
    else:
        logger.warning(f"No sites found in {config.input_file}")
        report = BatchReport(total_sites=0)

    if report.succeeded_count > 0:
        ResultWriter(config.output_file).write_records(report.records)
        logger.success(f"Saved {report.succeeded_count} VDP URL(s) to {config.output_file}")
    else:
        logger.warning("No VDP URLs found from any sites, nothing to write")

    logger.print_summary(
        total=report.total_sites,
        successful=report.succeeded_count,
        failed=report.failed_count,
        duration=time.time() - start_time
    )
    logger.info(f"Summary: {report.summary()} sites processed successfully")

    return report
