"""
validation of user configuration and expansion of the reference file paths it names
"""
from copy import copy as _copy
from typing import Dict, List

from mavis_config import bash_expands
from snakemake.utils import validate as snakemake_validate

from .schemas import CONFIG_SCHEMA
from .util import logger


def expand_reference_paths(patterns: List[str]) -> List[str]:
    """
    expand bash brace and glob patterns of reference file paths

    Raises:
        FileNotFoundError: a pattern does not match any file
    """
    file_list = []
    for pattern in patterns:
        expanded = bash_expands(pattern)
        if not expanded:
            raise FileNotFoundError('File not found', pattern)
        file_list.extend(expanded)
    return file_list


def validate_config(config: Dict, expand_paths: bool = True) -> Dict:
    """
    check a configuration against the config schema and fill in the defaults of missing options

    Args:
        config: dotted option names mapped to their values, e.g. {'regions.mode': 'exon'}
        expand_paths: expand the reference file patterns to the matching files

    Returns:
        a new dict, the input is not changed

    Raises:
        AssertionError: the config does not match the schema
        FileNotFoundError: a reference file pattern does not match any file
    """
    config = _copy(config)
    try:
        snakemake_validate(config, CONFIG_SCHEMA, set_default=True)
    except Exception as err:
        short_msg = '. '.join([line for line in str(err).split('\n') if line.strip()][:3])
        raise AssertionError(short_msg)
    if expand_paths:
        config['reference.snapshot'] = expand_reference_paths(config['reference.snapshot'])
    logger.debug(f'validated config: {config}')
    return config
