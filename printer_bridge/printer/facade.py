"""Access to the host OS printer subsystem.

Discovery and spooler submission shell out to Windows tools. Keeping them
behind ``PrinterFacade`` lets the rest of the printer package run against
an in-memory fake.
"""
import logging
import os
import subprocess
import tempfile
from abc import ABC, abstractmethod
from typing import List, Optional

from printer_bridge.printer.errors import DiscoveryUnavailable, TransmissionFailure

logger = logging.getLogger(__name__)


class PrinterFacade(ABC):
    """OS printer registry and spooler operations."""

    @abstractmethod
    def query_registry(self, fields: List[str]) -> str:
        """Return the printer registry as CSV text with the given columns.

        Raises:
            DiscoveryUnavailable: if the registry cannot be read.
        """
        pass

    @abstractmethod
    def submit_raw_job(self, printer_name: str, file_path: str) -> None:
        """Send the contents of ``file_path`` to a printer as a RAW job.

        Raises:
            TransmissionFailure: if the spooler rejects the job.
        """
        pass


# Writes a file to a printer through winspool.Drv without driver translation.
RAW_PRINT_SCRIPT = r'''param([string]$FilePath, [string]$PrinterName)
Add-Type -TypeDefinition @"
using System;
using System.Runtime.InteropServices;

[StructLayout(LayoutKind.Sequential, CharSet = CharSet.Ansi)]
public class RawDocInfo {
    [MarshalAs(UnmanagedType.LPStr)] public string pDocName;
    [MarshalAs(UnmanagedType.LPStr)] public string pOutputFile;
    [MarshalAs(UnmanagedType.LPStr)] public string pDataType;
}

public class RawSpooler {
    [DllImport("winspool.Drv", EntryPoint="OpenPrinterA", SetLastError=true)]
    public static extern bool OpenPrinter([MarshalAs(UnmanagedType.LPStr)] string name, out IntPtr handle, IntPtr defaults);
    [DllImport("winspool.Drv", EntryPoint="ClosePrinter", SetLastError=true)]
    public static extern bool ClosePrinter(IntPtr handle);
    [DllImport("winspool.Drv", EntryPoint="StartDocPrinterA", SetLastError=true)]
    public static extern bool StartDocPrinter(IntPtr handle, Int32 level, [In, MarshalAs(UnmanagedType.LPStruct)] RawDocInfo info);
    [DllImport("winspool.Drv", EntryPoint="EndDocPrinter", SetLastError=true)]
    public static extern bool EndDocPrinter(IntPtr handle);
    [DllImport("winspool.Drv", EntryPoint="StartPagePrinter", SetLastError=true)]
    public static extern bool StartPagePrinter(IntPtr handle);
    [DllImport("winspool.Drv", EntryPoint="EndPagePrinter", SetLastError=true)]
    public static extern bool EndPagePrinter(IntPtr handle);
    [DllImport("winspool.Drv", EntryPoint="WritePrinter", SetLastError=true)]
    public static extern bool WritePrinter(IntPtr handle, IntPtr bytes, Int32 count, out Int32 written);

    public static bool Send(string name, byte[] data) {
        IntPtr handle;
        RawDocInfo info = new RawDocInfo();
        info.pDocName = "ESC/POS Receipt";
        info.pDataType = "RAW";
        if (!OpenPrinter(name, out handle, IntPtr.Zero)) return false;
        if (!StartDocPrinter(handle, 1, info)) { ClosePrinter(handle); return false; }
        if (!StartPagePrinter(handle)) { EndDocPrinter(handle); ClosePrinter(handle); return false; }
        IntPtr unmanaged = Marshal.AllocCoTaskMem(data.Length);
        Marshal.Copy(data, 0, unmanaged, data.Length);
        int written;
        bool ok = WritePrinter(handle, unmanaged, data.Length, out written) && written == data.Length;
        Marshal.FreeCoTaskMem(unmanaged);
        EndPagePrinter(handle);
        EndDocPrinter(handle);
        ClosePrinter(handle);
        return ok;
    }
}
"@
$bytes = [System.IO.File]::ReadAllBytes($FilePath)
if (-not [RawSpooler]::Send($PrinterName, $bytes)) {
    Write-Error "RAW print to $PrinterName failed"
    exit 1
}
'''

RAW_PRINT_SCRIPT_NAME = "printer-bridge-raw-print.ps1"


class WindowsPrinterFacade(PrinterFacade):
    """Printer registry via ``wmic`` and RAW spooling via PowerShell."""

    def __init__(self, query_timeout: float = 5.0, submit_timeout: float = 10.0,
                 script_dir: Optional[str] = None):
        self.query_timeout = query_timeout
        self.submit_timeout = submit_timeout
        self.script_dir = script_dir or tempfile.gettempdir()
        self._script_path: Optional[str] = None

    def query_registry(self, fields: List[str]) -> str:
        """Run ``wmic printer get <fields> /format:csv``."""
        cmd = ["wmic", "printer", "get", ",".join(fields), "/format:csv"]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.query_timeout,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise DiscoveryUnavailable(f"Printer query failed: {e}") from e
        return result.stdout

    def submit_raw_job(self, printer_name: str, file_path: str) -> None:
        """Spool a file through the PowerShell RAW print helper."""
        try:
            cmd = [
                "powershell",
                "-NoProfile",
                "-ExecutionPolicy", "Bypass",
                "-File", self.ensure_script(),
                "-FilePath", file_path,
                "-PrinterName", printer_name,
            ]
            subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.submit_timeout,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip() or f"exit status {e.returncode}"
            raise TransmissionFailure(f"Spooler rejected job for {printer_name}: {detail}", e) from e
        except subprocess.TimeoutExpired as e:
            raise TransmissionFailure(
                f"Spooler submission timed out after {self.submit_timeout}s", e
            ) from e
        except OSError as e:
            raise TransmissionFailure(f"Could not start spooler helper: {e}", e) from e

    def ensure_script(self) -> str:
        """Write the RAW print helper script once and return its path."""
        if self._script_path and os.path.exists(self._script_path):
            return self._script_path

        path = os.path.join(self.script_dir, RAW_PRINT_SCRIPT_NAME)
        with open(path, "w", encoding="utf-8") as f:
            f.write(RAW_PRINT_SCRIPT)
        logger.debug("Wrote RAW print helper to %s", path)
        self._script_path = path
        return path

    def __repr__(self):
        return "WindowsPrinterFacade()"
