"""Career document generation: fact inventory extraction and claim-constrained writing."""
