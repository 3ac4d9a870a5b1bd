"""Configuration constants for audio enhancement."""

# Audio Configuration
DEFAULT_WINDOW_SIZE = 1024  # samples per FFT frame (power of two)
DEFAULT_OVERLAP_SIZE = 512  # samples shared by consecutive frames

# Stage enable defaults
DEFAULT_ENABLE_NOISE_REDUCTION = True
DEFAULT_ENABLE_ECHO_CANCELLATION = False
DEFAULT_ENABLE_AUTO_GAIN_CONTROL = True
DEFAULT_ENABLE_SPECTRAL_SUBTRACTION = False
DEFAULT_ENABLE_FREQUENCY_FILTERING = False

# Noise Reduction (RMS gate)
NOISE_REDUCTION_STRENGTH = 0.5  # 0.0 to 1.0
NOISE_GATE_WINDOW_SIZE = 256  # samples per gate window

# Noise Profile Estimation
NOISE_PROFILE_MAX_DURATION_SEC = 1.0  # seconds of audio used for the profile

# Spectral Subtraction
SPECTRAL_SUBTRACTION_ALPHA = 2.0  # Over-subtraction factor
SPECTRAL_SUBTRACTION_BETA = 0.01  # Spectral floor factor

# Frequency Filtering
HIGH_PASS_CUTOFF_HZ = 80.0  # Below this the gain ramps linearly to zero
LOW_PASS_CUTOFF_HZ = 8000.0  # Above this the gain decays exponentially

# Echo Cancellation
ECHO_CANCELLATION_STRENGTH = 0.5  # 0.0 to 1.0
ECHO_DELAY_SEC = 0.1  # 100ms fixed echo delay
ECHO_SUBTRACTION_SCALE = 0.5  # Fraction of the delayed signal removed at strength 1.0

# Automatic Gain Control
GAIN_CONTROL_THRESHOLD = 0.8  # Target linear RMS
AGC_WINDOW_SIZE = 1024  # samples per gain window
AGC_BOOST_RATIO = 0.1  # Windows below threshold * ratio are boosted
AGC_MAX_BOOST = 2.0  # Maximum boost gain

# Overlap-Chunk Reconstruction
CROSSFADE_WEIGHT_FLOOR = 1e-12  # Accumulated weight treated as uncovered

# Performance Monitoring
METRICS_LATENCY_HISTORY_SIZE = 100  # Number of latency measurements to track
BYTES_PER_MB = 1024 * 1024

# Processing Mode Presets
# Realtime: short frames, time-domain stages only
REALTIME_WINDOW_SIZE = 512
REALTIME_OVERLAP_SIZE = 128

# Balanced: default frames plus band limiting
BALANCED_WINDOW_SIZE = 1024
BALANCED_OVERLAP_SIZE = 512

# Quality: long frames, every spectral stage
QUALITY_WINDOW_SIZE = 2048
QUALITY_OVERLAP_SIZE = 1024
QUALITY_NOISE_REDUCTION_STRENGTH = 0.6
