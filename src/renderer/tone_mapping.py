# renderer/tone_mapping.py
import numpy as np

def gamma2_to_rgb8(accumulated, samples_per_pixel: int):
    """
    Converts summed sample radiance to 8-bit channels.

    Divides by the sample count, applies gamma 2 (square root), clamps to
    [0, 0.999] and scales by 256 with truncation. NaN channels come out as 0.
    """
    scaled = np.nan_to_num(np.asarray(accumulated, dtype=np.float64) / samples_per_pixel,
                           nan=0.0, posinf=1.0, neginf=0.0)
    corrected = np.sqrt(np.clip(scaled, 0.0, None))
    return (256.0 * np.clip(corrected, 0.0, 0.999)).astype(np.uint8)
