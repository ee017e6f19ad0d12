"""
module which holds all functions relating to loading reference files
"""
import json
import os
from typing import Callable, Dict, List, Optional

from snakemake.utils import validate as snakemake_validate

from ..cache import CACHE, ProcessCache
from ..region import BedRegion, read_bed
from ..store import SnapshotStore
from ..util import logger


def parse_snapshot_json(data: Dict) -> Dict:
    """
    validates a snapshot of the reference database against the snapshot schema and fills in defaults

    Raises:
        AssertionError: the data does not match the schema
    """
    try:
        snakemake_validate(
            data,
            os.path.join(os.path.dirname(__file__), 'snapshot_schema.json'),
            set_default=True,
        )
    except Exception as err:
        short_msg = '. '.join(
            [line for line in str(err).split('\n') if line.strip()][:3]
        )  # these can get super long
        raise AssertionError(short_msg)
    return data


def load_snapshot(*filepaths: str) -> Dict:
    """
    loads and merges snapshots of the reference database. Expects json files

    Args:
        filepaths: paths to the input files

    Returns:
        the merged snapshot content
    """
    snapshot: Dict = {'genes': [], 'transcripts': [], 'phenotypes': [], 'enums': {}}

    for filename in filepaths:
        with open(filename) as fh:
            data = json.load(fh)
        data = parse_snapshot_json(data)
        for section in ['genes', 'transcripts', 'phenotypes']:
            snapshot[section].extend(data.get(section, []))
        snapshot['enums'].update(data.get('enums', {}))
        logger.info(
            f'loaded {len(data.get("genes", []))} genes, {len(data.get("transcripts", []))} transcripts '
            f'and {len(data.get("phenotypes", []))} phenotype terms from {filename}'
        )
    return snapshot


def load_store(*filepaths: str) -> SnapshotStore:
    """
    load the reference snapshot files into a store. The store is keyed by the file names so
    that stores of the same files share the process caches
    """
    return SnapshotStore(load_snapshot(*filepaths), key=tuple(sorted(filepaths)))


def load_regions(*filepaths: str) -> List[BedRegion]:
    regions = []
    for filename in filepaths:
        regions.extend(read_bed(filename))
    return regions


class ReferenceFile:
    LOAD_FUNCTIONS: Dict[str, Optional[Callable]] = {
        'snapshot': load_store,
        'regions': load_regions,
    }
    """dict: Mapping of file types (based on config name) to load functions"""

    def __init__(
        self,
        file_type: str,
        *filepaths: str,
        eager_load: bool = False,
        assert_exists: bool = False,
        cache: ProcessCache = CACHE,
        **opt,
    ):
        """
        Args:
            *filepaths: list of paths to load
            file_type: Type of file to load
            eager_load: load the files immediately
            assert_exists: check that all files exist
            cache: the process cache the loaded content is shared through
            **opt: key word arguments to be passed to the load function and used as part of the file cache key

        Raises
            FileNotFoundError: when assert_exists and an input does not exist
        """
        self.name = sorted(filepaths)
        self.file_type = file_type
        self.key = tuple(
            ['reference_file', self.file_type] + self.name + sorted(list(opt.items()))
        )  # freeze the input state so we know when to reload
        self.content = None
        self.opt = opt
        self.cache = cache
        self.loader = self.LOAD_FUNCTIONS[self.file_type]
        if assert_exists:
            self.files_exist()
        if eager_load:
            self.load()

    def __repr__(self):
        cls = self.__class__.__name__
        return '{}(file_type={}, files={}, loaded={}, content={})'.format(
            cls, self.file_type, self.name, self.content is not None, object.__repr__(self.content)
        )

    def files_exist(self, not_empty=False):
        if not_empty and not self.name:
            raise FileNotFoundError('expected files but given an empty list', self)
        for filename in self.name:
            if not os.path.exists(filename):
                raise FileNotFoundError('Missing file', filename, self)

    def __iter__(self):
        return iter(self.name)

    def is_empty(self):
        return not self.name

    def is_loaded(self):
        return False if self.content is None else True

    def load(self):
        """
        load (or return) the contents of a reference file. Files are read once per cache

        Raises:
            Exception: the error of the loader, re-raised with the file names prepended to its arguments
        """
        if self.content is not None:
            return self
        self.files_exist()
        try:
            self.content = self.cache.get(self.key, self._read)
        except Exception as err:
            err.args = ('Error in loading files: {}'.format(', '.join(self.name)),) + tuple(err.args)
            raise
        return self

    def _read(self):
        logger.info(f'loading: {self.name}')
        return self.loader(*self.name, **self.opt)

    @classmethod
    def load_from_config(cls, config, file_type: str, **kwargs):
        return ReferenceFile(file_type, *config.get(f'reference.{file_type}', []), **kwargs)
