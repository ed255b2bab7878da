"""
Command-line entry points.

    taxonomy-load                       Load the bundled dataset
    taxonomy-teardown                   Delete every item in the table
    taxonomy-validate                   Validate the bundled dataset, no store access
    taxonomy-query <command> [args...]  Run one of the read queries

Results go to stdout as JSON; logs go to stderr. Every entry point returns
0 on success and 1 when a TaxonomyStoreError aborts the run.
"""

import json
import logging
import sys
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel

from .config import TaxonomyStoreConfig
from .core import TableGateway, create_table_gateway
from .data import WING_CHUN
from .exceptions import TaxonomyStoreError, ValidationError
from .handlers import TaxonomyAggregates, TaxonomyReadApi, TaxonomyWriteApi, validate_dataset
from .models import DemographicCategory

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "info") -> None:
    """Send log records to stderr at the given threshold."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(numeric_level)
    # botocore logs every request at DEBUG
    for noisy in ("botocore", "boto3", "urllib3"):
        logging.getLogger(noisy).setLevel(max(numeric_level, logging.WARNING))


def _resolve(gateway: Optional[TableGateway]) -> Tuple[TaxonomyStoreConfig, TableGateway]:
    if gateway is not None:
        return gateway.config, gateway
    config = TaxonomyStoreConfig.from_env()
    configure_logging(config.log_level)
    return config, create_table_gateway(config)


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode='json')
    if isinstance(result, list):
        return [_to_jsonable(entry) for entry in result]
    return result


def _print_json(result: Any) -> None:
    print(json.dumps(_to_jsonable(result), indent=2))


def _fail(stage: str, error: TaxonomyStoreError) -> int:
    fields = " ".join(f"{key}={value}" for key, value in error.log_fields().items())
    logger.error(f"Command failed stage={stage} message={error.message} {fields}")
    return 1


# =============================================================================
# Bulk commands
# =============================================================================

def load_main(gateway: Optional[TableGateway] = None) -> int:
    """Load the bundled Wing Chun taxonomy into the table."""
    configure_logging()
    try:
        config, gateway = _resolve(gateway)
        dataset = validate_dataset(WING_CHUN)
        report = TaxonomyWriteApi(gateway).bulk_load(dataset, config.organization_id)
    except TaxonomyStoreError as e:
        return _fail("bulk-load", e)
    _print_json(report)
    return 0


def teardown_main(gateway: Optional[TableGateway] = None) -> int:
    """Delete every item from the table."""
    configure_logging()
    try:
        _, gateway = _resolve(gateway)
        report = TaxonomyWriteApi(gateway).bulk_teardown()
    except TaxonomyStoreError as e:
        return _fail("bulk-teardown", e)
    _print_json(report)
    return 0


def validate_main() -> int:
    """Validate the bundled dataset without touching the store."""
    configure_logging()
    try:
        dataset = validate_dataset(WING_CHUN)
    except ValidationError as e:
        for error in e.errors:
            location = ".".join(str(part) for part in error.get('loc', ()))
            logger.error(f"Invalid field loc={location} message={error.get('msg')}")
        return _fail("validate", e)

    summary = {
        'program_id': dataset.program_id,
        'version': dataset.version,
        'ranks': dataset.total_levels,
        'requirements': len(dataset.build_requirements()),
        'curriculum': len(dataset.curriculum),
    }
    logger.info(
        f"Dataset valid program={dataset.program_id} version={dataset.version} "
        f"ranks={summary['ranks']} requirements={summary['requirements']} curriculum={summary['curriculum']}"
    )
    _print_json(summary)
    return 0


# =============================================================================
# Query command
# =============================================================================

class QueryCommand(str, Enum):
    """Commands accepted by taxonomy-query."""
    FETCH_ROOT = "fetch-root"
    LIST_RANKS = "list-ranks"
    GET_RANK = "get-rank"
    GET_REQUIREMENTS = "get-requirements"
    LIST_CURRICULUM = "list-curriculum"
    LIST_ALL_FOR_ROOT = "list-all-for-root"
    TIME_TO_TERMINAL_RANK = "time-to-terminal-rank"

    @classmethod
    def lookup(cls, name: Optional[str]) -> Optional['QueryCommand']:
        for command in cls:
            if command.value == name:
                return command
        return None


USAGE = """\
Usage: taxonomy-query <command> [args...]

  fetch-root                            Show the taxonomy root
  list-ranks                            List all ranks
  get-rank <level>                      Show a single rank
  get-requirements <level> [category]   Requirements for a level
  list-curriculum [category] [max_level]
                                        List curriculum items
  list-all-for-root                     All items of the program via GSI1
  time-to-terminal-rank [category] [level]
                                        Fastest path to the terminal rank
"""


def _arg(args: List[str], index: int) -> Optional[str]:
    return args[index] if len(args) > index and args[index] != "" else None


def _level_arg(args: List[str], index: int, default: Optional[int] = None) -> Optional[int]:
    raw = _arg(args, index)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError(f"Level must be an integer, got {raw!r}", original_error=e) from e


class QueryRunner:
    """Binds each QueryCommand to a read API call."""

    def __init__(self, config: TaxonomyStoreConfig, gateway: TableGateway):
        self.config = config
        self.read_api = TaxonomyReadApi(gateway)
        self.aggregates = TaxonomyAggregates(self.read_api)
        self.handlers: Dict[QueryCommand, Callable[[List[str]], Any]] = {
            QueryCommand.FETCH_ROOT: self.fetch_root,
            QueryCommand.LIST_RANKS: self.list_ranks,
            QueryCommand.GET_RANK: self.get_rank,
            QueryCommand.GET_REQUIREMENTS: self.get_requirements,
            QueryCommand.LIST_CURRICULUM: self.list_curriculum,
            QueryCommand.LIST_ALL_FOR_ROOT: self.list_all_for_root,
            QueryCommand.TIME_TO_TERMINAL_RANK: self.time_to_terminal_rank,
        }

    def run(self, command: QueryCommand, args: List[str]) -> Any:
        return self.handlers[command](args)

    def fetch_root(self, args):
        return self.read_api.get_root(self.config.organization_id, self.config.program_id)

    def list_ranks(self, args):
        return self.read_api.list_ranks(self.config.program_id)

    def get_rank(self, args):
        return self.read_api.get_rank(self.config.program_id, _level_arg(args, 0, default=1))

    def get_requirements(self, args):
        return self.read_api.get_requirements(self.config.program_id, _level_arg(args, 0, default=1), _arg(args, 1))

    def list_curriculum(self, args):
        return self.read_api.list_curriculum(self.config.program_id, _arg(args, 0), _level_arg(args, 1))

    def list_all_for_root(self, args):
        return self.read_api.list_all_for_root(self.config.program_id)

    def time_to_terminal_rank(self, args):
        category = _arg(args, 0) or DemographicCategory.ADULT.value
        return self.aggregates.time_to_terminal_rank(category, self.config.program_id, _level_arg(args, 1))


def query_main(argv: Optional[List[str]] = None, gateway: Optional[TableGateway] = None) -> int:
    """Dispatch ``taxonomy-query <command> [args...]``.

    A missing or unknown command prints the usage text and succeeds.
    """
    configure_logging()
    argv = sys.argv[1:] if argv is None else argv
    command = QueryCommand.lookup(argv[0] if argv else None)
    if command is None:
        if argv:
            logger.warning(f"Unknown query command={argv[0]}")
        print(USAGE, end="")
        return 0

    try:
        config, gateway = _resolve(gateway)
        result = QueryRunner(config, gateway).run(command, argv[1:])
    except TaxonomyStoreError as e:
        return _fail(f"query:{command.value}", e)
    _print_json(result)
    return 0


if __name__ == "__main__":
    sys.exit(query_main())
