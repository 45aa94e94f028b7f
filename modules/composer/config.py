"""
Composer configuration.

FFmpeg settings and output parameters for still-image music videos.
"""

# Video output settings
OUTPUT_VIDEO_CODEC = "libx264"
OUTPUT_VIDEO_TUNE = "stillimage"  # Optimize x264 for a static frame
OUTPUT_PIXEL_FORMAT = "yuv420p"  # Required by most players for H.264
OUTPUT_AUDIO_CODEC = "aac"
OUTPUT_AUDIO_BITRATE = "192k"

# Output naming
OUTPUT_FILENAME_TEMPLATE = "{mint_id}-video.mp4"

# Size of each read from the ffmpeg stderr pipe
STDERR_CHUNK_SIZE = 4096

# Duration handling
DURATION_TOLERANCE = 0.5  # 0.5s tolerance for duration matching
FFPROBE_TIMEOUT = 10  # Seconds before a duration probe is abandoned
