"""Chart generation stages. Each module registers one stage via ``@stage``."""
