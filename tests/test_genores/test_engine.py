import pytest

from genores.annotate.file_io import ReferenceFile
from genores.cache import CACHE, ProcessCache
from genores.config import validate_config
from genores.constants import OVERLAP_MODE, RESOLUTION_STATUS
from genores.engine import AnnotationEngine
from genores.error import InvalidArgumentError
from genores.region import BedRegion

from ..util import SNAPSHOT_FILE


class TestGenesOverlapping:
    def test_by_transcript(self, engine):
        assert engine.genes_overlapping('2', 1000, 2000) == {'BAZ1', 'NEAR'}
        assert engine.genes_overlapping('chr2', 1001, 1399) == {'BAZ1'}

    def test_by_exon(self, engine):
        assert engine.genes_overlapping_by_exon('2', 1001, 1399) == set()
        assert engine.genes_overlapping_by_exon('2', 1001, 1399, extend=2) == {'BAZ1'}

    def test_extend_from_config(self, store):
        engine = AnnotationEngine(store, config={'overlap.extend': 2})
        assert engine.genes_overlapping_by_exon('2', 1001, 1399) == {'BAZ1'}
        assert engine.genes_overlapping_by_exon('2', 1001, 1399, extend=0) == set()

    def test_index_built_once(self, engine):
        assert engine.overlap_index() is engine.overlap_index(OVERLAP_MODE.TRANSCRIPT)


class TestAnnotateRegions:
    def test_annotate(self, engine):
        regions = [
            BedRegion('chr2', 1000, 2000, ['target1']),
            BedRegion('chr1', 0, 5),
            BedRegion('chr1', 40, 41),
        ]
        assert engine.annotate_regions(regions) == [
            BedRegion('chr2', 1000, 2000, ['target1', 'BAZ1', 'NEAR']),
            BedRegion('chr1', 0, 5),
            BedRegion('chr1', 40, 41, ['FOO']),
        ]

    def test_annotate_by_exon_with_extend(self, engine):
        regions = [BedRegion('chr2', 1001, 1399)]
        assert engine.annotate_regions(regions, by=OVERLAP_MODE.EXON) == regions
        assert engine.annotate_regions(regions, extend=2, by=OVERLAP_MODE.EXON) == [
            BedRegion('chr2', 1001, 1399, ['BAZ1'])
        ]

    def test_invalid_mode(self, engine):
        with pytest.raises(InvalidArgumentError):
            engine.annotate_regions([], by='gene')


class TestCheckGeneNames:
    def test_outdated(self, engine):
        results = engine.check_gene_names(['FOO', 'FOO_OLD', 'BAR', 'TP53', 'NOPE'])
        assert [r.query for r in results] == ['FOO_OLD', 'BAR', 'NOPE']
        assert [r.status for r in results] == [
            RESOLUTION_STATUS.REPLACED,
            RESOLUTION_STATUS.AMBIGUOUS,
            RESOLUTION_STATUS.UNKNOWN,
        ]
        assert [r.symbol for r in results if r.is_resolved] == ['FOO']


class TestCheckOntology:
    def test_cycle_reported(self, engine):
        cycles = engine.check_ontology()
        assert len(cycles) == 1
        assert sorted(cycles[0]) == [7, 8]


class TestGetEnum:
    def test_snapshot_enum(self, engine):
        assert engine.get_enum('gene_transcript', 'biotype') == ['protein_coding', 'lncRNA']

    def test_default_enum(self, engine):
        assert engine.get_enum('gene_alias', 'type') == ['previous', 'synonym']
        assert engine.get_enum('gene_transcript', 'source') == ['ccds', 'ensembl']

    def test_unknown(self, engine):
        with pytest.raises(InvalidArgumentError):
            engine.get_enum('gene', 'colour')

    def test_cached_copy(self, engine):
        values = engine.get_enum('gene_alias', 'type')
        values.append('other')
        assert engine.get_enum('gene_alias', 'type') == ['previous', 'synonym']


class TestReset:
    def test_reset_rebuilds(self, engine):
        first = engine.overlap_index()
        approved = engine.resolver.approved_symbols()
        engine.reset()
        assert engine.overlap_index() is not first
        assert engine.resolver.approved_symbols() is not approved
        assert engine.resolver.approved_symbols() == approved

    def test_reset_keeps_other_stores(self, engine, snapshot):
        other = AnnotationEngine(type(engine.store)(snapshot))
        other_index = other.overlap_index()
        engine.overlap_index()
        engine.reset()
        assert other.overlap_index() is other_index


class TestFacade:
    def test_resolution(self, engine):
        assert engine.to_approved('P53') == 'TP53'
        assert engine.to_approved_set(['P53', 'BAR']) == {'TP53'}
        assert engine.resolve('BAR').status == RESOLUTION_STATUS.AMBIGUOUS

    def test_regions(self, engine):
        assert engine.regions_for_gene('FOO', mode='exon') == [
            BedRegion('chr1', 20, 50, ['FOO']),
            BedRegion('chr1', 60, 90, ['FOO']),
        ]
        assert engine.regions_for_genes(['FOO', 'MRG']) == [
            BedRegion('chr1', 10, 100, ['FOO']),
            BedRegion('chr3', 0, 30, ['MRG']),
        ]
        assert engine.longest_coding_transcript('TIE').name == 'TIE-1'

    def test_phenotypes(self, engine):
        assert engine.descendant_genes('Seizure', recursive=False) == {'FOO', 'BAR', 'TP53'}
        assert [t.name for t in engine.descendant_terms('Seizure')] == ['Focal-onset seizure']
        assert [t.name for t in engine.search_phenotypes(['partial'])] == ['Focal-onset seizure']


class TestFromConfig:
    def test_options_from_config(self):
        config = validate_config(
            {
                'reference.snapshot': [SNAPSHOT_FILE],
                'regions.mode': 'exon',
                'regions.fallback': True,
                'transcripts.fallback_alt_source': True,
            }
        )
        engine = AnnotationEngine.from_config(config)
        assert engine.regions_for_gene('FOO') == [
            BedRegion('chr1', 20, 50, ['FOO']),
            BedRegion('chr1', 60, 90, ['FOO']),
        ]
        assert engine.regions_for_gene('BAZ2') == [BedRegion('chr2', 2000, 2500, ['BAZ2'])]
        assert engine.regions_for_gene('FOO', mode='gene') == [BedRegion('chr1', 10, 100, ['FOO'])]
        assert engine.longest_coding_transcript('LNG').name == 'LNG-B'

    def test_store_shared_between_engines(self):
        config = validate_config({'reference.snapshot': [SNAPSHOT_FILE]})
        first = AnnotationEngine.from_config(config)
        second = AnnotationEngine.from_config(config)
        assert first.store is second.store

    def test_snapshot_loaded_into_given_cache(self):
        config = validate_config({'reference.snapshot': [SNAPSHOT_FILE]})
        cache = ProcessCache()
        engine = AnnotationEngine.from_config(config, cache=cache)
        key = ReferenceFile.load_from_config(config, 'snapshot').key
        assert key in cache
        assert key not in CACHE
        assert AnnotationEngine.from_config(config, cache=cache).store is engine.store
        assert AnnotationEngine.from_config(config).store is not engine.store

    def test_missing_snapshot(self):
        config = validate_config({}, expand_paths=False)
        with pytest.raises(FileNotFoundError):
            AnnotationEngine.from_config(config)
