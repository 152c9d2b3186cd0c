"""
Base classes for data ingestion.

Provides source reading, error translation and schema validation
shared by all loaders.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar
from urllib.error import URLError

import pandas as pd
import pandera.errors
import pandera.pandas as pa

from auclimate.config.settings import ReportPipelineConfig
from auclimate.errors import ParseError, SourceUnavailableError
from auclimate.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T", bound=pa.DataFrameModel)


def is_remote(source: str) -> bool:
    """Whether a source identifier is a URL rather than a local path."""
    return source.startswith(("http://", "https://", "ftp://"))


def read_delimited(source: str) -> pd.DataFrame:
    """
    Read a delimited text table with a header row from a URL or path.

    Raises:
        SourceUnavailableError: If the source cannot be reached or read.
        ParseError: If the content is not a parseable delimited table.
    """
    try:
        return pd.read_csv(source)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        msg = f"Could not parse {source} as CSV: {e}"
        raise ParseError(msg) from e
    except (URLError, OSError) as e:
        raise SourceUnavailableError(source, str(e)) from e


class DataLoader(ABC, Generic[T]):
    """
    Abstract base class for data loaders.

    Loaded frames are kept on the instance for the rest of the run so
    that repeated access does not refetch remote sources.
    """

    def __init__(self, config: ReportPipelineConfig, schema: type[T]) -> None:
        """
        Initialize data loader.

        Args:
            config: Run configuration.
            schema: Pandera schema for validation.
        """
        self.config = config
        self.schema = schema
        self._cached_data: pd.DataFrame | None = None

    @property
    @abstractmethod
    def source(self) -> str:
        """URL or path this loader reads."""
        ...

    def _load_raw(self) -> pd.DataFrame:
        """Load raw data from source."""
        log.info("Reading source", source=self.source, remote=is_remote(self.source))
        return read_delimited(self.source)

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Load and optionally validate data.

        Args:
            validate: Whether to validate against schema.

        Returns:
            A copy of the loaded (and optionally validated) DataFrame.

        Raises:
            SourceUnavailableError: If the source cannot be read.
            ParseError: If the content does not match the schema.
        """
        if self._cached_data is None:
            log.info("Loading data", loader=self.__class__.__name__)

            df = self._load_raw()
            log.info("Loaded raw data", rows=len(df), columns=list(df.columns))

            if validate:
                df = self._validate(df)
                log.info("Schema validation passed", schema=self.schema.__name__)

            self._cached_data = df
        else:
            log.debug("Using cached data", loader=self.__class__.__name__)

        return self._cached_data.copy()

    def clear_cache(self) -> None:
        """Forget the loaded frame so the next load rereads the source."""
        self._cached_data = None

    def _validate(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Validate DataFrame against schema.

        Raises:
            ParseError: Wrapping the Pandera schema error.
        """
        try:
            return self.schema.validate(df)
        except (pandera.errors.SchemaError, pandera.errors.SchemaErrors) as e:
            msg = f"{self.source} does not match {self.schema.__name__}: {e}"
            raise ParseError(msg) from e
