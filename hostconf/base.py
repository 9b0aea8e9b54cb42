"""Capability interfaces implemented once per platform family."""

from __future__ import annotations

import abc
from typing import List

from .records import Acknowledgment, RepositoryRecord, StartupRecord


class RepositoryBackend(abc.ABC):
    @abc.abstractmethod
    def list(self) -> List[RepositoryRecord]:
        ...

    @abc.abstractmethod
    def toggle(self, record_id: str, enabled: bool) -> Acknowledgment:
        ...

    @abc.abstractmethod
    def add(self, repo_line: str) -> Acknowledgment:
        ...

    @abc.abstractmethod
    def delete(self, record_id: str) -> Acknowledgment:
        ...


class StartupBackend(abc.ABC):
    @abc.abstractmethod
    def list(self) -> List[StartupRecord]:
        ...

    @abc.abstractmethod
    def toggle(self, file: str, enabled: bool) -> Acknowledgment:
        ...

    @abc.abstractmethod
    def add(self, name: str, exec_line: str) -> Acknowledgment:
        ...

    @abc.abstractmethod
    def edit(self, file: str, name: str, exec_line: str) -> Acknowledgment:
        ...

    @abc.abstractmethod
    def delete(self, file: str) -> Acknowledgment:
        ...
