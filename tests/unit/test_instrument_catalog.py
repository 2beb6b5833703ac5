"""Unit tests for InstrumentCatalog."""

import pytest

from portfolio_sim.catalog.base import Instrument, Quote, Sector
from portfolio_sim.catalog.instrument_catalog import InstrumentCatalog
from portfolio_sim.utils.exceptions import ConfigurationError, InstrumentNotFoundError


class TestInstrument:
    """Test cases for Instrument dataclass."""

    def test_sector_string_converted(self) -> None:
        """Test sector given as string becomes a Sector."""
        instrument = Instrument("ACME", "Acme", 10.0, 0.0, "energy", 0.2, 1.0)
        assert instrument.sector == Sector.ENERGY

    def test_invalid_price(self) -> None:
        """Test instrument rejects non-positive price."""
        with pytest.raises(ValueError, match="price must be positive"):
            Instrument("ACME", "Acme", 0.0, 0.0, Sector.ENERGY, 0.2, 1.0)

    def test_invalid_volatility(self) -> None:
        """Test instrument rejects volatility above 1."""
        with pytest.raises(ValueError, match="volatility must be in"):
            Instrument("ACME", "Acme", 10.0, 0.0, Sector.ENERGY, 1.5, 1.0)

    def test_to_dict_uses_sector_value(self) -> None:
        """Test to_dict serializes the sector as a string."""
        instrument = Instrument("ACME", "Acme", 10.0, 0.5, Sector.ENERGY, 0.2, 1.0)
        data = instrument.to_dict()

        assert data["sector"] == "energy"
        assert data["symbol"] == "ACME"
        assert data["price"] == 10.0


class TestCatalogConstruction:
    """Test cases for building catalogs."""

    def test_default_catalog(self) -> None:
        """Test built-in table has 18 instruments in order."""
        catalog = InstrumentCatalog.default()

        assert len(catalog) == 18
        symbols = [i.symbol for i in catalog.all()]
        assert symbols[:4] == ["AAPL", "MSFT", "GOOGL", "NVDA"]
        assert symbols[-1] == "BA"

    def test_default_catalogs_are_independent(self) -> None:
        """Test each default() call owns its own prices."""
        first = InstrumentCatalog.default()
        second = InstrumentCatalog.default()

        first.apply_price_moves({"AAPL": 0.02})

        assert second.lookup("AAPL").price == 178.50

    def test_duplicate_symbol(self) -> None:
        """Test duplicate symbols are rejected."""
        records = [
            {"symbol": "ACME", "price": 10.0, "sector": "energy"},
            {"symbol": "ACME", "price": 12.0, "sector": "energy"},
        ]
        with pytest.raises(ConfigurationError, match="Duplicate symbol"):
            InstrumentCatalog.from_records(records)

    def test_empty_catalog(self) -> None:
        """Test empty instrument list is rejected."""
        with pytest.raises(ConfigurationError, match="must not be empty"):
            InstrumentCatalog([])

    def test_invalid_sector_record(self) -> None:
        """Test unknown sector in a record is a configuration error."""
        with pytest.raises(ConfigurationError, match="Invalid instrument record"):
            InstrumentCatalog.from_records(
                [{"symbol": "ACME", "price": 10.0, "sector": "mining"}]
            )

    def test_invalid_price_record(self) -> None:
        """Test non-positive price in a record is a configuration error."""
        with pytest.raises(ConfigurationError, match="Invalid instrument record"):
            InstrumentCatalog.from_records(
                [{"symbol": "ACME", "price": -1.0, "sector": "energy"}]
            )

    def test_record_defaults(self) -> None:
        """Test optional record fields get defaults."""
        catalog = InstrumentCatalog.from_records(
            [{"symbol": "ACME", "price": 10.0, "sector": "energy"}]
        )
        instrument = catalog.lookup("ACME")

        assert instrument.name == "ACME"
        assert instrument.change == 0.0
        assert instrument.volatility == 0.0
        assert instrument.dividend_yield == 0.0

    def test_record_price_rounded_to_cents(self) -> None:
        """Test configured prices are stored in whole cents."""
        catalog = InstrumentCatalog.from_records(
            [{"symbol": "ACME", "price": 100.123, "sector": "energy"}]
        )

        assert catalog.lookup("ACME").price == 100.12
        assert catalog.quotes()["ACME"].price == 100.12

    def test_record_price_below_a_cent(self) -> None:
        """Test a price that rounds to zero is a configuration error."""
        with pytest.raises(ConfigurationError, match="Invalid instrument record"):
            InstrumentCatalog.from_records(
                [{"symbol": "ACME", "price": 0.004, "sector": "energy"}]
            )


class TestLookup:
    """Test cases for lookup methods."""

    @pytest.fixture
    def catalog(self) -> InstrumentCatalog:
        """Create default catalog."""
        return InstrumentCatalog.default()

    def test_lookup_known_symbol(self, catalog: InstrumentCatalog) -> None:
        """Test lookup returns the instrument."""
        instrument = catalog.lookup("MSFT")

        assert instrument.name == "Microsoft Corp."
        assert instrument.price == 378.25
        assert instrument.sector == Sector.TECHNOLOGY

    def test_lookup_unknown_symbol(self, catalog: InstrumentCatalog) -> None:
        """Test lookup raises for unknown symbol."""
        with pytest.raises(InstrumentNotFoundError, match="Stock ZZZZ not found"):
            catalog.lookup("ZZZZ")

    def test_get_unknown_symbol(self, catalog: InstrumentCatalog) -> None:
        """Test get returns None for unknown symbol."""
        assert catalog.get("ZZZZ") is None

    def test_contains(self, catalog: InstrumentCatalog) -> None:
        """Test membership check."""
        assert "KO" in catalog
        assert "ZZZZ" not in catalog

    def test_lookup_returns_copy(self, catalog: InstrumentCatalog) -> None:
        """Test mutating a looked-up instrument leaves the catalog alone."""
        instrument = catalog.lookup("AAPL")
        instrument.price = 1.0

        assert catalog.lookup("AAPL").price == 178.50

    def test_all_returns_copies(self, catalog: InstrumentCatalog) -> None:
        """Test mutating all() results leaves the catalog alone."""
        for instrument in catalog.all():
            instrument.price = 1.0

        assert catalog.lookup("KO").price == 60.85

    def test_by_sector(self, catalog: InstrumentCatalog) -> None:
        """Test sector filter keeps catalog order."""
        healthcare = catalog.by_sector(Sector.HEALTHCARE)
        assert [i.symbol for i in healthcare] == ["JNJ", "UNH", "PFE"]


class TestPrices:
    """Test cases for quotes and price moves."""

    @pytest.fixture
    def catalog(self) -> InstrumentCatalog:
        """Create small catalog."""
        return InstrumentCatalog.from_records(
            [
                {"symbol": "ACME", "price": 100.0, "sector": "technology", "volatility": 0.5},
                {"symbol": "BOLT", "price": 50.0, "change": 1.5, "sector": "energy"},
            ]
        )

    def test_quotes_snapshot(self, catalog: InstrumentCatalog) -> None:
        """Test quotes cover every instrument."""
        quotes = catalog.quotes()

        assert quotes == {
            "ACME": Quote("ACME", 100.0, 0.0),
            "BOLT": Quote("BOLT", 50.0, 1.5),
        }

    def test_apply_price_moves(self, catalog: InstrumentCatalog) -> None:
        """Test moves update price and percent change."""
        quotes = catalog.apply_price_moves({"ACME": 0.02})

        assert quotes["ACME"].price == 102.0
        assert quotes["ACME"].change == 2.0
        assert catalog.lookup("ACME").price == 102.0
        # Untouched symbol keeps its price and change
        assert quotes["BOLT"] == Quote("BOLT", 50.0, 1.5)

    def test_apply_negative_move(self, catalog: InstrumentCatalog) -> None:
        """Test a negative move lowers the price."""
        catalog.apply_price_moves({"BOLT": -0.1})

        instrument = catalog.lookup("BOLT")
        assert instrument.price == 45.0
        assert instrument.change == -10.0

    def test_apply_unknown_symbol(self, catalog: InstrumentCatalog) -> None:
        """Test unknown symbol rejects the whole batch."""
        with pytest.raises(InstrumentNotFoundError):
            catalog.apply_price_moves({"ACME": 0.02, "ZZZZ": 0.01})

        assert catalog.lookup("ACME").price == 100.0

    def test_old_quotes_not_changed_by_move(self, catalog: InstrumentCatalog) -> None:
        """Test a snapshot is not affected by later moves."""
        before = catalog.quotes()
        catalog.apply_price_moves({"ACME": 0.02})

        assert before["ACME"].price == 100.0


class TestValidateSectors:
    """Test cases for validate_sectors."""

    def test_all_sectors_present(self) -> None:
        """Test default catalog covers all sectors."""
        InstrumentCatalog.default().validate_sectors(list(Sector))

    def test_missing_sector(self) -> None:
        """Test missing sector raises ConfigurationError."""
        catalog = InstrumentCatalog.from_records(
            [{"symbol": "ACME", "price": 10.0, "sector": "energy"}]
        )
        with pytest.raises(ConfigurationError, match="healthcare"):
            catalog.validate_sectors([Sector.ENERGY, Sector.HEALTHCARE])
