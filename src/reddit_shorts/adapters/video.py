"""IVideoCompositor adapter: caption card + narration over background footage with MoviePy."""

from moviepy import AudioFileClip, CompositeVideoClip, ImageClip, VideoFileClip, vfx

from reddit_shorts import config
from reddit_shorts.domain.models import Clip
from reddit_shorts.errors import CompositionError
from reddit_shorts.ports.interfaces import IVideoCompositor


class MoviePyCompositor(IVideoCompositor):
    """
    Builds one vertical clip per segment:
    - background seeked past its intro, scaled to the frame height and centre-cropped
    - caption card scaled to a fixed width, semi-transparent, centred
    - narration as the only audio; output length equals the narration length
    """

    def __init__(
        self,
        width: int = None,
        height: int = None,
        fps: int = None,
        seek_seconds: float = None,
        caption_width: int = None,
        caption_opacity: float = None,
        preset: str = "medium",
    ):
        self.width = width or config.VIDEO_WIDTH
        self.height = height or config.VIDEO_HEIGHT
        self.fps = fps or config.FPS
        self.seek_seconds = config.BACKGROUND_SEEK_SECONDS if seek_seconds is None else seek_seconds
        self.caption_width = caption_width or config.CAPTION_WIDTH
        self.caption_opacity = config.CAPTION_OPACITY if caption_opacity is None else caption_opacity
        self.preset = preset

    def _fit_background(self, background, duration: float):
        """Seek, loop to `duration`, scale to the frame height and centre-crop."""
        start = self.seek_seconds if background.duration > self.seek_seconds else 0
        clip = background.subclipped(start)
        if clip.duration < duration:
            clip = clip.with_effects([vfx.Loop(duration=duration)])
        clip = clip.subclipped(0, duration)

        clip = clip.resized(height=self.height)
        if clip.w < self.width:
            # narrower than the frame at full height: fill the width instead
            clip = clip.resized(width=self.width)
        return clip.cropped(
            x_center=clip.w / 2,
            y_center=clip.h / 2,
            width=self.width,
            height=self.height,
        )

    def compose(
        self,
        background_path: str,
        caption_path: str,
        narration_path: str,
        output_path: str,
    ) -> Clip:
        print(f"  🎬 Creating video at {output_path}")
        narration = background = caption = video = None
        try:
            narration = AudioFileClip(narration_path)
            duration = narration.duration
            if not duration or duration <= 0:
                raise CompositionError(f"Narration has no duration: {narration_path}")

            background = VideoFileClip(background_path, audio=False)
            base = self._fit_background(background, duration)
            caption = (
                ImageClip(caption_path)
                .resized(width=self.caption_width)
                .with_opacity(self.caption_opacity)
                .with_position("center")
                .with_duration(duration)
            )
            video = (
                CompositeVideoClip([base, caption], size=(self.width, self.height))
                .with_duration(duration)
                .with_audio(narration)
            )
            video.write_videofile(
                str(output_path),
                fps=self.fps,
                codec="libx264",
                audio_codec="aac",
                preset=self.preset,
                ffmpeg_params=["-pix_fmt", "yuv420p"],
                logger=None,
            )
        except CompositionError:
            raise
        except Exception as e:
            raise CompositionError(f"Error creating video: {e}") from e
        finally:
            for clip in (video, caption, background, narration):
                if clip is not None:
                    clip.close()

        print(f"  ✅ Video creation completed: {output_path}")
        return Clip(path=str(output_path), duration=duration)
