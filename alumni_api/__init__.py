"""Alumni portal API: accounts, sessions, news and vacancies."""
