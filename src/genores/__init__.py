"""
resolution of gene symbols, phenotype ontology traversal and conversion of genes to genomic regions
"""
__version__ = '0.1.0'
