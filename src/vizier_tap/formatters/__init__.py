"""Output formatters for vizier-tap."""

from vizier_tap.formatters.base import Formatter, FormatterRegistry, registry
from vizier_tap.formatters.csv import CSVFormatter
from vizier_tap.formatters.json import JSONFormatter
from vizier_tap.formatters.table import TableFormatter
