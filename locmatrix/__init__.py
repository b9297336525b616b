"""LocMatrix: crawl linked content records and report localization coverage per locale."""
