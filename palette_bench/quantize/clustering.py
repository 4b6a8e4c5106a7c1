"""K-means adapters built on scikit-learn and OpenCV."""

from __future__ import annotations

import cv2
import numpy as np
from PIL import Image
from sklearn.cluster import KMeans

from ..io.models import Palette, Swatch
from .base import QuantizationStrategy, cluster_count, colors_from_rows, pixel_array, to_color
from .swatches import normalize

_RANDOM_STATE = 42
_N_INIT = 5
_CV_ATTEMPTS = 10
_CV_MAX_ITER = 20
_CV_EPSILON = 1.0


class SklearnKMeans(QuantizationStrategy):
    """Cluster pixels with ``sklearn.cluster.KMeans``.

    Cluster sizes are kept as swatch populations, so the palette is ordered
    with the most common cluster first.
    """

    name = "sklearn-kmeans"
    label = "scikit-learn KMeans"

    def _extract(self, image: Image.Image, k: int) -> Palette:
        pixels = pixel_array(image)
        n_clusters = cluster_count(pixels, k)

        model = KMeans(n_clusters=n_clusters, n_init=_N_INIT, random_state=_RANDOM_STATE)
        labels = model.fit_predict(pixels.astype(np.float64))
        populations = np.bincount(labels, minlength=n_clusters)

        swatches = [
            Swatch(color=to_color(centre), population=int(population))
            for centre, population in zip(model.cluster_centers_, populations)
        ]
        return normalize(swatches)


class OpenCVKMeans(QuantizationStrategy):
    """Cluster pixels with ``cv2.kmeans`` and return centres in label order."""

    name = "opencv-kmeans"
    label = "OpenCV cv2.kmeans"

    def _extract(self, image: Image.Image, k: int) -> Palette:
        pixels = pixel_array(image)
        n_clusters = cluster_count(pixels, k)

        criteria = (
            cv2.TERM_CRITERIA_EPS + cv2.TERM_CRITERIA_MAX_ITER,
            _CV_MAX_ITER,
            _CV_EPSILON,
        )
        cv2.setRNGSeed(_RANDOM_STATE)
        _, _, centres = cv2.kmeans(
            np.float32(pixels),
            n_clusters,
            None,
            criteria,
            _CV_ATTEMPTS,
            cv2.KMEANS_PP_CENTERS,
        )
        return colors_from_rows(centres.tolist())
