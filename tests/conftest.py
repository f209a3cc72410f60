"""Shared fixtures: a small NEGRA export corpus with coreference comments."""

from io import StringIO

import pytest

from negra_coref.core.pipeline import CorpusConverter
from negra_coref.io.negra import read_export

# Sentence 1 points forward to sentence 2 and sentence 2 points back.
SAMPLE_EXPORT = """#FORMAT 4
%% word lemma tag morph edge parent secedge comment
#BOS 1 2 1070544990 0 %% sample
Der      der      ART    nsm   -   500
Mann     Mann     NN     nsm   HD  500
schläft  schlafen VVFIN  3sis  HD  501  %% typo
.        --       $.     --    --  0
#500     --       NX     --    ON  502  %% R=coreferential.2:500
#501     --       VXFIN  --    HD  502
#502     --       SIMPX  --    --  0
#EOS 1
#BOS 2 2 1070544990 0
Er       er       PPER   nsm3  HD  500
sieht    sehen    VVFIN  3sis  HD  501
Maria    Maria    NE     asf   HD  502
.        --       $.     --    --  0
#500     --       NX     --    ON  503  %% R=coreferential.1:500
#501     --       VXFIN  --    HD  503
#502     --       NX     --    OA  503  %% R=anaphoric.1:500 typo=Marie
#503     --       SIMPX  --    --  0
#EOS 2
"""


@pytest.fixture
def sample_export():
    return SAMPLE_EXPORT


@pytest.fixture
def sample_trees():
    return read_export(StringIO(SAMPLE_EXPORT))


@pytest.fixture
def sample_corpus(sample_trees):
    """Sample sentences with identifier maps, not yet resolved."""
    return CorpusConverter().load(sample_trees)
