"""Shared pytest fixtures for PNM Autocontrast tests."""

import pytest
import numpy as np
from pathlib import Path
import tempfile


# =============================================================================
# Buffer Fixtures
# =============================================================================

@pytest.fixture
def two_level_buffer():
    """2x2 grayscale image with two well-separated levels."""
    return np.array([10, 10, 250, 250], dtype=np.uint8)


@pytest.fixture
def low_contrast_buffer():
    """Grayscale 257x131 buffer confined to 60..190 with sparse outliers.

    The odd size makes the sample count indivisible by common worker counts.
    """
    rng = np.random.default_rng(42)
    buffer = rng.integers(60, 191, size=257 * 131, dtype=np.uint8)
    outliers = rng.choice(buffer.size, size=40, replace=False)
    buffer[outliers[:20]] = 2
    buffer[outliers[20:]] = 253
    return buffer


@pytest.fixture
def rgb_buffer():
    """Interleaved RGB samples for a 37x23 image."""
    rng = np.random.default_rng(7)
    return rng.integers(40, 200, size=37 * 23 * 3, dtype=np.uint8)


@pytest.fixture
def full_range_buffer():
    """Every byte value exactly once."""
    return np.arange(256, dtype=np.uint8)


# =============================================================================
# File System Fixtures
# =============================================================================

@pytest.fixture
def temp_output_dir():
    """Create temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_raw_pnm(path: Path, magic: bytes, width: int, height: int,
                  maxval: int, samples: bytes) -> Path:
    """Write a PNM file byte by byte, independent of the package writer."""
    path.write_bytes(b"%s\n%d %d\n%d\n" % (magic, width, height, maxval) + samples)
    return path


@pytest.fixture
def pgm_file(temp_output_dir, low_contrast_buffer):
    """P5 file holding low_contrast_buffer (257x131)."""
    return write_raw_pnm(temp_output_dir / "gray.pgm", b"P5", 257, 131, 255,
                         low_contrast_buffer.tobytes())


@pytest.fixture
def ppm_file(temp_output_dir, rgb_buffer):
    """P6 file holding rgb_buffer (37x23)."""
    return write_raw_pnm(temp_output_dir / "color.ppm", b"P6", 37, 23, 255,
                         rgb_buffer.tobytes())


@pytest.fixture
def tiny_pgm_file(temp_output_dir, two_level_buffer):
    """2x2 P5 file with samples [10, 10, 250, 250]."""
    return write_raw_pnm(temp_output_dir / "tiny.pnm", b"P5", 2, 2, 255,
                         two_level_buffer.tobytes())


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return {
        'threads': 3,
        'coefficient': 0.05,
        'layout': 'planar',
        'output': {
            'folder': 'stretched',
        },
    }


@pytest.fixture
def temp_config_file(temp_output_dir, sample_config):
    """Create a temporary config YAML file."""
    import yaml
    config_path = temp_output_dir / "config.yaml"
    with open(config_path, 'w') as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PNM_AUTOCONTRAST_* variables from leaking into tests."""
    for var in ('THREADS', 'COEFFICIENT', 'VERBOSE', 'LAYOUT', 'OUTPUT_FOLDER'):
        monkeypatch.delenv(f"PNM_AUTOCONTRAST_{var}", raising=False)


# =============================================================================
# Skip Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "benchmark: mark test as a performance benchmark"
    )


@pytest.fixture
def pnm_writer():
    """Function writing raw PNM bytes: (path, magic, width, height, maxval, samples)."""
    return write_raw_pnm
