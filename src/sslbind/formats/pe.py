"""Windows PE DLL parsing."""
from __future__ import annotations
import lief
from typing import List
from .base import Loader, Export
from .utils import function_exports
from ..core.exceptions import ProbeError
from ..utils.logger import log


class PE(Loader):
    """Windows DLL loader.
    
    Reads the export directory (libssl-3-x64.dll and friends).
    """
    
    def __init__(self, path: str):
        super().__init__(path)
        self.bin = None
        
    def parse(self) -> None:
        """Parse PE file format."""
        log.debug(f"PE: Loading {self.path}")
        self.bin = lief.PE.parse(self.path)
        if self.bin is None:
            raise ProbeError(f"Could not parse PE file: {self.path}")
        
        if self.bin.has_exports:
            self.soname = self.bin.get_export().name or None
        
        log.debug(f"PE: name={self.soname}")
    
    def exports(self) -> List[Export]:
        """Get export table entries from PE."""
        return function_exports(self.bin.exported_functions)
