"""Factory for creating library loaders based on file format."""
from __future__ import annotations
import os
import struct
from typing import Optional, Literal
from .base import Loader
from ..core.exceptions import ProbeError

# Mach-O thin and fat magics, both byte orders
_MACHO_MAGICS = {
    b'\xfe\xed\xfa\xce', b'\xce\xfa\xed\xfe',
    b'\xfe\xed\xfa\xcf', b'\xcf\xfa\xed\xfe',
    b'\xca\xfe\xba\xbe', b'\xbe\xba\xfe\xca',
}


class Factory:
    """Factory for automatic library format detection and loader creation.
    
    Detects ELF/PE/Mach-O format and instantiates the appropriate loader.
    """
    
    @staticmethod
    def create(path: str) -> Loader:
        """Create appropriate loader based on file format detection.
        
        Args:
            path: Path to shared library file
            
        Returns:
            Parsed loader instance
            
        Raises:
            FileNotFoundError: If file doesn't exist
            ProbeError: If file format is not supported
        """
        fmt = Factory.detect(path)
        
        if fmt == "ELF":
            from .elf import ELF
            loader = ELF(path)
        elif fmt == "PE":
            from .pe import PE
            loader = PE(path)
        elif fmt == "MachO":
            from .macho import MachO
            loader = MachO(path)
        else:
            raise ProbeError(f"Unknown library format for file: {path}")
        
        loader.parse()
        return loader
    
    @staticmethod
    def detect(path: str) -> Optional[Literal["ELF", "PE", "MachO"]]:
        """Detect library file format.
        
        Args:
            path: Path to shared library file
            
        Returns:
            "ELF", "PE" or "MachO" if recognized, None if unknown
        
        Raises:
            FileNotFoundError: If file doesn't exist
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"File not found: {path}")
        
        with open(path, 'rb') as f:
            magic = f.read(4)
            
            # Check for ELF magic
            if magic == b'\x7fELF':
                return "ELF"
            
            if magic in _MACHO_MAGICS:
                return "MachO"
            
            # Check for PE/DOS MZ header
            if magic[:2] == b'MZ':
                # Read PE offset
                f.seek(0x3C)
                raw = f.read(4)
                if len(raw) < 4:
                    return None
                pe_offset = struct.unpack('<I', raw)[0]
                
                # Check PE signature
                f.seek(pe_offset)
                if f.read(4) == b'PE\x00\x00':
                    return "PE"
                    
        return None
