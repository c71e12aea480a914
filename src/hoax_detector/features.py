"""
Feature extraction module for the Hoax Detector
Implements word and character n-gram TF-IDF features
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.sparse import hstack, csr_matrix
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.feature_extraction.text import TfidfVectorizer

from .config import FEATURIZER_CONFIG

logger = logging.getLogger(__name__)

# Default sklearn pattern drops single-character tokens
WORD_TOKEN_PATTERN = r"(?u)\b\w+\b"

# Placeholder column when no analyzer finds any terms
EMPTY_FEATURE_NAME = "empty"


class FeatureExtractor(TransformerMixin, BaseEstimator):
    """
    Text featurizer combining word n-grams and character n-grams

    Both vectorizers are learned on the training texts; the fitted vocabularies
    and IDF weights travel with the pipeline when it is persisted.
    """

    def __init__(
        self,
        word_ngram_range: Tuple[int, int] = (1, 2),
        char_ngram_range: Optional[Tuple[int, int]] = (3, 3),
        lowercase: bool = True,
        sublinear_tf: bool = True,
        norm: str = "l2",
        min_df: float = 1,
        max_df: float = 1.0,
        max_features: Optional[int] = 10000
    ):
        """
        Initialize feature extractor

        Args:
            word_ngram_range: Range of word n-grams to extract
            char_ngram_range: Range of character n-grams (None disables them)
            lowercase: Lowercase text before tokenizing
            sublinear_tf: Use 1 + log(tf)
            norm: Row normalization of each vectorizer's output
            min_df: Minimum document frequency
            max_df: Maximum document frequency
            max_features: Maximum vocabulary size per vectorizer
        """
        self.word_ngram_range = word_ngram_range
        self.char_ngram_range = char_ngram_range
        self.lowercase = lowercase
        self.sublinear_tf = sublinear_tf
        self.norm = norm
        self.min_df = min_df
        self.max_df = max_df
        self.max_features = max_features

    def _make_vectorizer(self, analyzer: str, ngram_range: Tuple[int, int]) -> TfidfVectorizer:
        params = dict(
            analyzer=analyzer,
            ngram_range=tuple(ngram_range),
            lowercase=self.lowercase,
            sublinear_tf=self.sublinear_tf,
            norm=self.norm,
            min_df=self.min_df,
            max_df=self.max_df,
            max_features=self.max_features,
            use_idf=True,
            smooth_idf=True
        )
        if analyzer == "word":
            # Keep one-character words ("a", "5")
            params["token_pattern"] = WORD_TOKEN_PATTERN
        return TfidfVectorizer(**params)

    def _fit_vectorizer(
        self,
        analyzer: str,
        ngram_range: Optional[Tuple[int, int]],
        texts: List[str]
    ) -> Optional[TfidfVectorizer]:
        """Fit one vectorizer, or return None when the texts yield no terms for it"""
        if ngram_range is None:
            return None
        vectorizer = self._make_vectorizer(analyzer, ngram_range)
        analyze = vectorizer.build_analyzer()
        if not any(analyze(text) for text in texts):
            logger.warning("No %s n-grams found in the training texts; skipping that block", analyzer)
            return None
        return vectorizer.fit(texts)

    def fit(self, texts: Sequence[str], y=None):
        """
        Fit vectorizers on training texts

        A block whose vocabulary would be empty is left out. When both are
        empty the extractor emits a single all-zero column.

        Args:
            texts: Assembled texts
            y: Ignored

        Returns:
            self
        """
        texts = list(texts)
        self.word_vectorizer_ = self._fit_vectorizer("word", self.word_ngram_range, texts)
        self.char_vectorizer_ = self._fit_vectorizer("char_wb", self.char_ngram_range, texts)
        self.n_features_ = len(self.get_feature_names_out())
        return self

    def _vectorizers(self):
        return [
            (prefix, vectorizer)
            for prefix, vectorizer in (("word", self.word_vectorizer_), ("char", self.char_vectorizer_))
            if vectorizer is not None
        ]

    def transform(self, texts: Sequence[str]) -> csr_matrix:
        if not hasattr(self, "n_features_"):
            raise RuntimeError("Feature extractor must be fitted before transform!")

        texts = list(texts)
        features = [vectorizer.transform(texts) for _, vectorizer in self._vectorizers()]
        if not features:
            return csr_matrix((len(texts), 1), dtype=np.float64)
        if len(features) > 1:
            return hstack(features).tocsr()
        return features[0].tocsr()

    def get_feature_names_out(self, input_features=None) -> np.ndarray:
        names: List[str] = []
        for prefix, vectorizer in self._vectorizers():
            names.extend(f"{prefix}_{name}" for name in vectorizer.get_feature_names_out())
        if not names:
            names.append(EMPTY_FEATURE_NAME)
        return np.asarray(names, dtype=object)


def create_text_featurizer(config: Optional[Dict[str, Any]] = None) -> FeatureExtractor:
    """Create the featurizer shared by the binary and multiclass pipelines"""
    params = dict(FEATURIZER_CONFIG)
    if config:
        params.update(config)
    return FeatureExtractor(**params)
