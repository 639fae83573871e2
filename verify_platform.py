#!/usr/bin/env python3
"""
Cross-Platform Verification Script

Verifies that compressed_io works on the current interpreter.
Some Python builds ship without the zlib or _bz2 extension modules, which
the gzip and bz2 codecs depend on.
"""

import io
import platform
import shutil
import sys
import tempfile
from pathlib import Path

SAMPLE = "Hello, world or 你好，世界 or καλημέρα κόσμε\n".encode("utf-8")


def print_header(text):
    """Print a formatted header."""
    print(f"\n{'='*60}")
    print(f"  {text}")
    print(f"{'='*60}\n")

def print_success(text):
    try:
        print(f"✅ {text}")
    except UnicodeEncodeError:
        print(f"[OK] {text}")

def print_warning(text):
    try:
        print(f"⚠️  {text}")
    except UnicodeEncodeError:
        print(f"[WARNING] {text}")

def print_error(text):
    try:
        print(f"❌ {text}")
    except UnicodeEncodeError:
        print(f"[ERROR] {text}")

def check_platform_info():
    """Display platform information."""
    print_header("Platform Information")
    print(f"System: {platform.system()}")
    print(f"Architecture: {platform.machine()}")
    print(f"Python: {sys.version}")
    print(f"Python Implementation: {platform.python_implementation()}")

def check_imports():
    """Verify the package and the codec extension modules import."""
    print_header("Checking Imports")

    try:
        from compressed_io import list_available_formats
        print_success("Core imports successful")
    except ImportError as e:
        print_error(f"Core import failed: {e}")
        return False

    for module, description in {"zlib": "gzip codec", "_bz2": "bzip2 codec"}.items():
        try:
            __import__(module)
            print_success(f"{description} available")
        except ImportError:
            print_error(f"{description} missing ({module} not built into this Python)")
            return False

    for tag, info in list_available_formats().items():
        directions = "/".join(d for d in ("read", "write") if info[d])
        print(f"  {tag or '(none)':6} {info['name']:6} {directions}")
    return True

def test_gzip_round_trip():
    """Write and read back gzip data through an in-memory sink."""
    print_header("Testing gzip Round Trip")

    try:
        from compressed_io import make_compressing_writer, make_decompressing_reader, nop_closer

        sink = io.BytesIO()
        with make_compressing_writer(nop_closer(sink), None, ".gz") as writer:
            writer.write(SAMPLE)
        print_success(f"Compressed {len(SAMPLE)} bytes to {sink.tell()} bytes")

        sink.seek(0)
        with make_decompressing_reader(sink, None, ".gz") as reader:
            assert reader.read() == SAMPLE, "Decompressed data doesn't match"
        print_success("gzip round trip successful")
        return True

    except Exception as e:
        print_error(f"gzip round trip failed: {e}")
        import traceback
        traceback.print_exc()
        return False

def test_bzip2_read():
    """Read bzip2 data produced by the standard library."""
    print_header("Testing bzip2 Read")

    try:
        import bz2
        from compressed_io import make_compressing_writer, make_decompressing_reader

        with make_decompressing_reader(io.BytesIO(bz2.compress(SAMPLE)), None, ".bz2") as reader:
            assert reader.read() == SAMPLE, "Decompressed data doesn't match"
        print_success("bzip2 read successful")

        assert make_compressing_writer(io.BytesIO(), None, ".bz2") is None
        print_success("bzip2 write correctly reported as unsupported")
        return True

    except Exception as e:
        print_error(f"bzip2 read failed: {e}")
        import traceback
        traceback.print_exc()
        return False

def test_files():
    """Write and read a .gz file on disk."""
    print_header("Testing Files")

    try:
        from compressed_io import open_reader, open_writer

        temp_dir = tempfile.mkdtemp()
        try:
            path = Path(temp_dir) / "sample.txt.gz"
            with open_writer(path) as writer:
                writer.write(SAMPLE)
            with open_reader(path) as reader:
                assert reader.read() == SAMPLE
            print_success("File round trip successful")

            assert open_reader(Path(temp_dir) / "missing.gz") is None
            print_success("Missing file reported as None")
        finally:
            if Path(temp_dir).exists():
                shutil.rmtree(temp_dir)
        return True

    except Exception as e:
        print_error(f"File test failed: {e}")
        import traceback
        traceback.print_exc()
        return False

def main():
    """Run all verification tests."""
    print_header("compressed_io Cross-Platform Verification")

    tests = [
        ("Platform Info", check_platform_info),
        ("Imports", check_imports),
        ("gzip Round Trip", test_gzip_round_trip),
        ("bzip2 Read", test_bzip2_read),
        ("Files", test_files),
    ]

    results = {}
    for name, test_func in tests:
        try:
            if name == "Platform Info":
                test_func()
                results[name] = True
            else:
                results[name] = test_func()
        except Exception as e:
            print_error(f"Test '{name}' crashed: {e}")
            results[name] = False

    print_header("Verification Summary")

    test_results = {k: v for k, v in results.items() if k != "Platform Info"}
    passed = sum(1 for v in test_results.values() if v)
    total = len(test_results)

    for name, result in test_results.items():
        if result:
            print_success(f"{name}: PASSED")
        else:
            print_error(f"{name}: FAILED")

    print(f"\n{passed}/{total} tests passed")

    if passed == total:
        print_success(f"All tests passed on {platform.system()}!")
        return 0
    else:
        print_warning(f"Some tests failed on {platform.system()}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
