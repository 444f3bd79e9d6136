"""Engine-facing runtime: metrics, measurement and orchestration."""
