"""
Smoke check for the Cloudinary media backend
Run this to verify your Cloudinary credentials before starting the API
"""
import os
import sys
import tempfile
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

missing = [
    name for name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET")
    if not os.getenv(name)
]

if missing:
    print(f"ERROR: {', '.join(missing)} not set in .env file")
    print("\nPlease:")
    print("1. Copy .env.example to .env")
    print("2. Fill in the Cloudinary credentials from your Cloudinary console")
    print("3. Or set MEDIA_BACKEND=local to store media on disk during development")
    sys.exit(1)

print(f"Cloud name: {os.getenv('CLOUDINARY_CLOUD_NAME')}")
print("\nTesting Cloudinary upload and delete...")

from app.core.exceptions import UpstreamError
from app.core.media_storage import CloudinaryMediaStorage

storage = CloudinaryMediaStorage(
    os.getenv("CLOUDINARY_CLOUD_NAME"),
    os.getenv("CLOUDINARY_API_KEY"),
    os.getenv("CLOUDINARY_API_SECRET"),
)

# 1x1 transparent GIF
PIXEL = (
    b"GIF89a\x01\x00\x01\x00\x80\x00\x00\x00\x00\x00\xff\xff\xff!\xf9\x04\x01\x00\x00\x00\x00"
    b",\x00\x00\x00\x00\x01\x00\x01\x00\x00\x02\x02D\x01\x00;"
)

with tempfile.NamedTemporaryFile(suffix=".gif", delete=False) as tmp:
    tmp.write(PIXEL)
    local_path = tmp.name

try:
    result = storage.upload(local_path)
    print(f"Upload OK: {result['url']}")
    storage.delete(result["url"])
    print("Delete OK")
except UpstreamError as e:
    print(f"Cloudinary check failed: {e.message}")
    sys.exit(1)
finally:
    os.remove(local_path)

print("\nCloudinary is configured correctly.")
