"""
Example environments for demos and tests.

A trimmed-down capture of a Visual Studio 2022 x64 Developer Command
Prompt (EXAMPLE_DEV_ENV) and of the plain MSYS2 shell it was started
from (EXAMPLE_USER_ENV). Both are written the way `env` prints them:
one NAME=value per line, sorted by name.
"""
from typing import Tuple

from vs2sh.model import Snapshot
from vs2sh.parser import parse_snapshot_string


VS = r"C:\Program Files\Microsoft Visual Studio\2022\Community"
KITS = r"C:\Program Files (x86)\Windows Kits\10"
MSVC_VERSION = "14.39.33519"
REDIST_VERSION = "14.38.33135"
SDK_VERSION = "10.0.22621.0"

_USER_LINES = [
    "HOME=/home/dev",
    "PATH=/usr/local/bin:/usr/bin:/bin:/c/Windows/system32:/c/Windows",
    "SHELL=/usr/bin/bash",
    "TERM=xterm-256color",
]

_DEV_LINES = [
    "CommandPromptType=Native",
    "DevEnvDir=" + VS + "\\Common7\\IDE\\",
    "EXTERNAL_INCLUDE=" + VS + "\\VC\\Tools\\MSVC\\" + MSVC_VERSION + "\\include;"
    + KITS + "\\include\\" + SDK_VERSION + "\\ucrt",
    "ExtensionSdkDir=C:\\Program Files (x86)\\Microsoft SDKs\\Windows Kits\\10\\ExtensionSDKs",
    "Framework40Version=v4.0",
    "FrameworkDir=C:\\Windows\\Microsoft.NET\\Framework64\\",
    "FrameworkDir64=C:\\Windows\\Microsoft.NET\\Framework64\\",
    "FrameworkVersion=v4.0.30319",
    "FrameworkVersion64=v4.0.30319",
    "HOME=/home/dev",
    "INCLUDE=" + VS + "\\VC\\Tools\\MSVC\\" + MSVC_VERSION + "\\include;"
    + KITS + "\\include\\" + SDK_VERSION + "\\ucrt",
    "is_x64_arch=true",
    "LIB=" + VS + "\\VC\\Tools\\MSVC\\" + MSVC_VERSION + "\\lib\\x64;"
    + KITS + "\\lib\\" + SDK_VERSION + "\\ucrt\\x64;"
    + KITS + "\\lib\\" + SDK_VERSION + "\\um\\x64",
    "LIBPATH=" + VS + "\\VC\\Tools\\MSVC\\" + MSVC_VERSION + "\\lib\\x64;"
    + KITS + "\\UnionMetadata\\" + SDK_VERSION + ";",
    "NETFXSDKDir=C:\\Program Files (x86)\\Windows Kits\\NETFXSDK\\4.8\\",
    "PATH=/c/Program Files/Microsoft Visual Studio/2022/Community/Common7/IDE/VC/VCPackages:"
    "/c/Program Files/Microsoft Visual Studio/2022/Community/VC/Tools/MSVC/"
    + MSVC_VERSION + "/bin/HostX64/x64:"
    "/usr/local/bin:/usr/bin:/bin:/c/Windows/system32:/c/Windows",
    "Platform=x64",
    "PROMPT=$P$G",
    "SHELL=/usr/bin/bash",
    "TERM=xterm-256color",
    "UCRTVersion=" + SDK_VERSION,
    "UniversalCRTSdkDir=" + KITS + "\\",
    "VCIDEInstallDir=" + VS + "\\Common7\\IDE\\VC\\",
    "VCINSTALLDIR=" + VS + "\\VC\\",
    "VCToolsInstallDir=" + VS + "\\VC\\Tools\\MSVC\\" + MSVC_VERSION + "\\",
    "VCToolsRedistDir=" + VS + "\\VC\\Redist\\MSVC\\" + REDIST_VERSION + "\\",
    "VCToolsVersion=" + MSVC_VERSION,
    "VisualStudioVersion=17.0",
    "VS170COMNTOOLS=" + VS + "\\Common7\\Tools\\",
    "VSCMD_ARG_app_plat=Desktop",
    "VSCMD_ARG_HOST_ARCH=x64",
    "VSCMD_ARG_TGT_ARCH=x64",
    "VSCMD_VER=17.9.6",
    "VSINSTALLDIR=" + VS + "\\",
    "WindowsLibPath=" + KITS + "\\UnionMetadata\\" + SDK_VERSION + ";"
    + KITS + "\\References\\" + SDK_VERSION,
    "WindowsSdkBinPath=" + KITS + "\\bin\\",
    "WindowsSdkDir=" + KITS + "\\",
    "WindowsSDKLibVersion=" + SDK_VERSION + "\\",
    "WindowsSdkVerBinPath=" + KITS + "\\bin\\" + SDK_VERSION + "\\",
    "WindowsSDKVersion=" + SDK_VERSION + "\\",
    "_=/usr/bin/env",
]

EXAMPLE_USER_ENV = "\n".join(_USER_LINES) + "\n"
EXAMPLE_DEV_ENV = "\n".join(_DEV_LINES) + "\n"


def build_example_snapshots() -> Tuple[Snapshot, Snapshot]:
    """Return (development, default) snapshots of the example environments."""
    return (
        parse_snapshot_string(EXAMPLE_DEV_ENV),
        parse_snapshot_string(EXAMPLE_USER_ENV),
    )
