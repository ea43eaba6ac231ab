"""Tests for TableRegistry: lazy construction, caching, concurrency, errors.

Golden values are taken from the packaged resources.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from localetables import (
    LocaleNotFoundError,
    MessageCatalog,
    ResourceDomain,
    ResourceFormatError,
    TableRegistry,
    get_registry,
    load_catalog,
    load_table,
)
from localetables.diagnostics import DiagnosticCode
from localetables.enums import LoadStatus
from localetables.loading import PathResourceLoader
from tests.conftest import MINIMAL_TABLE_JSON


class CountingLoader:
    """In-memory loader that counts reads and can stall them."""

    def __init__(self, files: dict[tuple[str, str], bytes], delay: float = 0.0) -> None:
        self._files = files
        self._delay = delay
        self._lock = threading.Lock()
        self.reads: dict[tuple[str, str], int] = {}

    def read(self, domain: ResourceDomain, identifier: str) -> bytes:
        with self._lock:
            key = (str(domain), identifier)
            self.reads[key] = self.reads.get(key, 0) + 1
        if self._delay:
            time.sleep(self._delay)
        try:
            return self._files[(str(domain), identifier)]
        except KeyError:
            raise FileNotFoundError(identifier) from None

    def identifiers(self, domain: ResourceDomain) -> tuple[str, ...]:
        return tuple(sorted(i for d, i in self._files if d == str(domain)))

    def describe_path(self, domain: ResourceDomain, identifier: str) -> str:
        return f"memory:{domain}/{identifier}"


def _memory_registry(delay: float = 0.0) -> tuple[TableRegistry, CountingLoader]:
    loader = CountingLoader({("FormatData", "xx"): MINIMAL_TABLE_JSON.encode()}, delay=delay)
    return TableRegistry(loader), loader


# =============================================================================
# PACKAGED DATA
# =============================================================================


class TestPackagedTables:
    """Lookups against the packaged resources."""

    def test_japanese_calendars_share_month_names(self, registry: TableRegistry) -> None:
        ja = registry.load("ja")
        months = ja["MonthNames"]
        assert len(months) == 13
        assert months == (
            "1月", "2月", "3月", "4月", "5月", "6月",
            "7月", "8月", "9月", "10月", "11月", "12月", "",
        )  # fmt: skip
        assert ja["roc.MonthNames"] is months
        assert ja["buddhist.MonthNames"] is months
        assert ja["japanese.MonthAbbreviations"] is months
        assert "roc.MonthNames" in ja.aliases("MonthNames")

    def test_composed_pattern_keys(self, registry: TableRegistry) -> None:
        ja = registry.load("ja")
        patterns = ja["java.time.islamic.DatePatterns"]
        assert patterns == ("Gy年M月d日EEEE", "Gy年M月d日", "Gy/MM/dd", "Gy/MM/dd")
        assert ja["java.time.roc.DatePatterns"] is patterns
        assert ja.get("java.time.islamic") is None

    def test_field_names(self, registry: TableRegistry) -> None:
        assert registry.load("tr").get("field.year") == "yıl"
        assert registry.load("ru").get("field.year") == "год"
        assert registry.load("zh").get("field.year") == "年"

    def test_number_elements(self, registry: TableRegistry) -> None:
        elements = registry.load("ru")["latn.NumberElements"]
        assert len(elements) == 11
        assert elements[0] == ","
        assert elements[-1] == "не\u00a0число"

    def test_hebrew_registered_under_legacy_code(self, registry: TableRegistry) -> None:
        assert registry.load("iw").get("field.year") == "שנה"
        with pytest.raises(LocaleNotFoundError):
            registry.load("he")

    def test_locale_names(self, registry: TableRegistry) -> None:
        pt = registry.load("pt-PT", ResourceDomain.LOCALE_NAMES)
        assert pt.get("ps") == "pastó"
        assert pt.get("PS") == "Territórios palestinianos"

    def test_currency_names(self, registry: TableRegistry) -> None:
        ps = registry.load("ps", "CurrencyNames")
        assert ps.get("AFN") == "؋"
        assert ps.get("afn") == "افغانۍ"

    def test_time_zone_metazones_shared(self, registry: TableRegistry) -> None:
        pt = registry.load("pt-PT", ResourceDomain.TIME_ZONE_NAMES)
        moscow = pt["Europe/Moscow"]
        assert moscow == (
            "Hora padrão de Moscovo",
            "",
            "Hora de verão de Moscovo",
            "",
            "Hora de Moscovo",
            "",
        )
        assert pt["Europe/Minsk"] is moscow
        assert pt.shared_name("Europe/Moscow") == "Moscow"
        assert pt.aliases("Europe/Moscow") == (
            "Europe/Moscow",
            "Europe/Simferopol",
            "Europe/Minsk",
            "Europe/Volgograd",
        )
        assert pt.shared_name("Asia/Tokyo") == "Japan"

    def test_exemplar_cities(self, registry: TableRegistry) -> None:
        pt = registry.load("pt_PT", "TimeZoneNames")
        assert pt.get("timezone.excity.Europe/Moscow") == "Moscovo"
        assert pt.shared_name("timezone.excity.Europe/Moscow") is None
        gsw = registry.load("gsw", "TimeZoneNames")
        assert gsw.get("timezone.excity.Europe/Moscow") == "Moskau"

    def test_time_zone_names_with_script_and_region(self, registry: TableRegistry) -> None:
        hk = registry.load("zh-Hant-HK", ResourceDomain.TIME_ZONE_NAMES)
        assert hk.identifier == "zh_Hant_HK"
        pacific = hk["America/Los_Angeles"]
        assert pacific[0] == "北美太平洋標準時間"
        assert pacific[1] == "PST"
        assert hk["America/Vancouver"] is pacific
        assert hk.get("timezone.excity.Asia/Irkutsk") == "伊爾庫茨克"
        assert registry.load("es-419", "TimeZoneNames").identifier == "es_419"

    def test_time_zone_locales_available(self, registry: TableRegistry) -> None:
        assert registry.available(ResourceDomain.TIME_ZONE_NAMES) == (
            "dz", "en_CA", "es_419", "gsw", "lb", "os", "pt_PT", "uz_Cyrl", "wae", "zh_Hant_HK",
        )  # fmt: skip

    def test_absent_key_is_none(self, registry: TableRegistry) -> None:
        assert registry.load("ja").get("this.key.does.not.exist") is None


class TestCatalogs:
    """Message catalogs in the agent domain."""

    def test_default_catalog_is_root(self, registry: TableRegistry) -> None:
        root = registry.load_catalog()
        assert isinstance(root, MessageCatalog)
        assert root.identifier == "root"
        assert root.get("jmxremote.ConnectorBootstrap.ready") == "JMX Connector ready at: {0}"
        assert root.get("agent.err.error") == "Error"
        assert registry.load_catalog("") is root
        assert registry.load_catalog("root") is root

    def test_translated_catalog(self, registry: TableRegistry) -> None:
        zh = registry.load_catalog("zh-CN")
        assert zh.identifier == "zh_CN"
        ready = zh.get("jmxremote.ConnectorBootstrap.ready")
        assert ready == "JMX 连接器已在 {0} 处准备就绪"
        assert zh.placeholders("jmxremote.ConnectorBootstrap.ready") == frozenset({0})

    def test_catalogs_have_same_ids(self, registry: TableRegistry) -> None:
        root = registry.load_catalog()
        assert len(root) == 37
        for identifier in ("de", "ja", "zh_CN"):
            assert list(registry.load_catalog(identifier)) == list(root)

    def test_non_catalog_domain_rejected(self, registry: TableRegistry) -> None:
        with pytest.raises(ValueError, match="message catalogs"):
            registry.load_catalog("ja", ResourceDomain.FORMAT_DATA)

    def test_missing_catalog(self, registry: TableRegistry) -> None:
        with pytest.raises(LocaleNotFoundError) as exc_info:
            registry.load_catalog("fr")
        assert exc_info.value.domain == "agent"


# =============================================================================
# CACHING
# =============================================================================


class TestCaching:
    """One table object per (domain, canonical identifier)."""

    def test_same_object_returned(self, registry: TableRegistry) -> None:
        assert registry.load("ja") is registry.load("ja")

    def test_spellings_share_cache_entry(self, registry: TableRegistry) -> None:
        table = registry.load("zh_Hant")
        assert registry.load("zh-hant") is table
        assert registry.load("ZH-HANT") is table
        assert len(registry) == 1

    def test_domains_cached_separately(self, registry: TableRegistry) -> None:
        registry.load("ja")
        registry.load_catalog("ja")
        assert len(registry) == 2

    def test_resource_read_once(self) -> None:
        registry, loader = _memory_registry()
        for _ in range(5):
            registry.load("xx")
        assert loader.reads == {("FormatData", "xx"): 1}

    def test_cache_hit_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        registry, _ = _memory_registry()
        registry.load("xx")
        with caplog.at_level(logging.DEBUG, logger="localetables.loading.registry"):
            registry.load("xx")
        assert any("Cache hit" in record.getMessage() for record in caplog.records)

    def test_is_loaded(self, registry: TableRegistry) -> None:
        assert not registry.is_loaded("ja")
        registry.load("ja")
        assert registry.is_loaded("ja")
        assert registry.is_loaded("JA")
        assert not registry.is_loaded("ja", ResourceDomain.AGENT)
        assert not registry.is_loaded("!!")

    def test_clear(self) -> None:
        registry, loader = _memory_registry()
        first = registry.load("xx")
        registry.clear()
        assert len(registry) == 0
        second = registry.load("xx")
        assert second is not first
        assert second == first
        assert loader.reads[("FormatData", "xx")] == 2

    def test_failures_not_cached(self) -> None:
        registry, loader = _memory_registry()
        for _ in range(2):
            with pytest.raises(LocaleNotFoundError):
                registry.load("yy")
        assert loader.reads[("FormatData", "yy")] == 2
        assert len(registry) == 0

    def test_process_wide_registry(self) -> None:
        assert get_registry() is get_registry()
        assert load_table("ja") is get_registry().load("ja")
        assert load_catalog() is get_registry().load_catalog("root")


class TestConcurrency:
    """Concurrent first requests construct a table exactly once."""

    def test_concurrent_first_load(self) -> None:
        registry, loader = _memory_registry(delay=0.05)
        workers = 16
        barrier = threading.Barrier(workers)

        def load() -> object:
            barrier.wait()
            return registry.load("xx")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            tables = list(executor.map(lambda _: load(), range(workers)))

        assert all(table is tables[0] for table in tables)
        assert loader.reads == {("FormatData", "xx"): 1}

    def test_concurrent_packaged_loads(self, registry: TableRegistry) -> None:
        identifiers = registry.available() * 4
        with ThreadPoolExecutor(max_workers=8) as executor:
            tables = list(executor.map(registry.load, identifiers))
        by_identifier: dict[str, object] = {}
        for table in tables:
            assert by_identifier.setdefault(table.identifier, table) is table
        assert len(registry) == len(registry.available())


# =============================================================================
# ERRORS
# =============================================================================


class TestErrors:
    """Not-found, malformed identifiers and malformed resources."""

    def test_not_found(self, registry: TableRegistry) -> None:
        with pytest.raises(LocaleNotFoundError) as exc_info:
            registry.load("xx")
        error = exc_info.value
        assert isinstance(error, LookupError)
        assert error.identifier == "xx"
        assert error.domain == "FormatData"
        assert error.diagnostic is not None
        assert error.diagnostic.code is DiagnosticCode.LOCALE_NOT_FOUND
        assert error.diagnostic.hint is not None
        assert "ja" in error.diagnostic.hint

    @pytest.mark.parametrize("identifier", ["", "123", "../ja", "ja/ru"])
    def test_invalid_identifier(self, registry: TableRegistry, identifier: str) -> None:
        with pytest.raises(LocaleNotFoundError) as exc_info:
            registry.load(identifier)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.INVALID_IDENTIFIER

    def test_unknown_domain(self, registry: TableRegistry) -> None:
        with pytest.raises(ValueError):
            registry.load("ja", "CalendarData")

    def test_malformed_resource(self, data_root: Path, caplog: pytest.LogCaptureFixture) -> None:
        bad = data_root / "FormatData" / "bad.json"
        bad.write_text('{"format": 1, "domain": "FormatData", "locale": "bad"', encoding="utf-8")
        registry = TableRegistry(PathResourceLoader(data_root))
        with caplog.at_level(logging.ERROR, logger="localetables.loading.registry"):
            with pytest.raises(ResourceFormatError) as exc_info:
                registry.load("bad")
        assert exc_info.value.source_path == str(bad)
        assert any("Failed to parse" in record.getMessage() for record in caplog.records)
        assert not registry.is_loaded("bad")

    def test_locale_field_must_match_file(self, data_root: Path) -> None:
        (data_root / "FormatData" / "yy.json").write_text(MINIMAL_TABLE_JSON, encoding="utf-8")
        registry = TableRegistry(PathResourceLoader(data_root))
        with pytest.raises(ResourceFormatError):
            registry.load("yy")


# =============================================================================
# PRELOAD
# =============================================================================


class TestPreload:
    """preload() records outcomes instead of raising."""

    def test_all_packaged_tables_load(self, registry: TableRegistry) -> None:
        for domain in ResourceDomain:
            summary = registry.preload(domain)
            assert summary.all_successful, summary.get_errors()
            assert summary.total_attempted == len(registry.available(domain))
            assert summary.total_keys > 0

    def test_mixed_outcomes(self, data_root: Path) -> None:
        (data_root / "FormatData" / "bad.json").write_text("[]", encoding="utf-8")
        registry = TableRegistry(PathResourceLoader(data_root))
        summary = registry.preload(ResourceDomain.FORMAT_DATA, ["xx", "bad", "missing"])

        assert summary.total_attempted == 3
        assert summary.successful == 1
        assert summary.errors == 1
        assert summary.not_found == 1
        assert summary.has_errors
        assert not summary.all_successful
        assert summary.total_keys == 4

        (ok,) = summary.get_by_identifier("xx")
        assert ok.status is LoadStatus.SUCCESS
        assert ok.key_count == 4
        (error,) = summary.get_errors()
        assert isinstance(error.error, ResourceFormatError)
        assert error.source_path is not None
        assert error.source_path.endswith("bad.json")
        (missing,) = summary.get_not_found()
        assert missing.identifier == "missing"
        assert repr(summary) == "LoadSummary(total=3, ok=1, not_found=1, errors=1)"

    def test_preload_defaults_to_available(self, data_root: Path) -> None:
        registry = TableRegistry(PathResourceLoader(data_root))
        summary = registry.preload(ResourceDomain.AGENT)
        assert [result.identifier for result in summary.get_successful()] == ["root"]
        assert registry.is_loaded("root", ResourceDomain.AGENT)
