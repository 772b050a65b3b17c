"""
Coefficient matrices and white points used by the step converters.

All arrays are read-only. Forward/inverse pairs are inverses to double
precision, and the gray rows of the RGB/LMS families sum to one so that an
achromatic input stays exactly achromatic.
"""

from __future__ import annotations

import numpy as np


def _frozen(rows) -> np.ndarray:
    arr = np.array(rows, dtype=np.float64)
    arr.setflags(write=False)
    return arr


# White points (Y = 1)
WHITE_D65 = _frozen([3127 / 3290, 1.0, 3583 / 3290])
WHITE_D50 = _frozen([0.3457 / 0.3585, 1.0, (1.0 - 0.3457 - 0.3585) / 0.3585])

# ----------------------------------------------------------------------
# RGB <-> XYZ
# ----------------------------------------------------------------------

LIN_SRGB_TO_XYZ = _frozen(
    [
        [0.412390799265959500, 0.357584339383877960, 0.180480788401834300],
        [0.212639005871510360, 0.715168678767755919, 0.072192315360733721],
        [0.019330818715591850, 0.119194779794625990, 0.950532152249660600],
    ]
)

XYZ_TO_LIN_SRGB = _frozen(
    [
        [3.240969941904521300, -1.537383177570093500, -0.498610760293003300],
        [-0.969243636280879800, 1.875967501507720700, 0.041555057407175610],
        [0.055630079696993610, -0.203976958888976560, 1.056971514242878600],
    ]
)

LIN_DISPLAY_P3_TO_XYZ = _frozen(
    [
        [0.48657094864821615, 0.26566769316909306, 0.19821728523436247],
        [0.22897456406974878, 0.6917385218365063, 0.07928691409374498],
        [-3.9720755169334874e-17, 0.04511338185890263, 1.0439443689009757],
    ]
)

XYZ_TO_LIN_DISPLAY_P3 = _frozen(
    [
        [2.4934969119414254, -0.931383617919124, -0.4027107844507169],
        [-0.8294889695615748, 1.7626640603183465, 0.023624685841943587],
        [0.03584583024378447, -0.07617238926804183, 0.9568845240076874],
    ]
)

# ----------------------------------------------------------------------
# Oklab
# ----------------------------------------------------------------------

XYZ_TO_LMS_OKLAB = _frozen(
    [
        [0.81902243799670298, 0.36190626005289043, -0.12887378152098789],
        [0.03298365393238838, 0.92928686158634340, 0.03614466635064236],
        [0.04817718935962420, 0.26423953175273083, 0.63354782846943085],
    ]
)

LMS_OKLAB_TO_XYZ = _frozen(
    [
        [1.22687987584592420, -0.55781499446021700, 0.28139104566596470],
        [-0.04057574521480076, 1.11228680328031700, -0.07171105806551627],
        [-0.07637293667466008, -0.42149333240224320, 1.58692401983678168],
    ]
)

LMS3_TO_OKLAB = _frozen(
    [
        [0.2104542683093139600, 0.7936177747023052985, -0.0040720430116192585],
        [1.9779985324311687300, -2.4285922420485800000, 0.4505937096174112700],
        [0.0259040424655477290, 0.7827717124575297000, -0.8086757549230774290],
    ]
)

OKLAB_TO_LMS3 = _frozen(
    [
        [1.0, 0.396337777376174900, 0.215803757309914122],
        [1.0, -0.105561345815658570, -0.063854172825813300],
        [1.0, -0.089484177529811860, -1.291485548019409200],
    ]
)

LIN_SRGB_TO_LMS = _frozen(
    [
        [0.412221469470762970, 0.536332537261734860, 0.051445993267502170],
        [0.211903495817825170, 0.680699550645234330, 0.107396953536940500],
        [0.088302459190056390, 0.281718839136121400, 0.629978701673822210],
    ]
)

LMS_TO_LIN_SRGB = _frozen(
    [
        [4.076741636075957476, -3.307711539258061776, 0.230969903182104300],
        [-1.268437973285031031, 2.609757349287688131, -0.341319376002657100],
        [-0.004196076138675467, -0.703418617935936100, 1.707614694074611567],
    ]
)

LIN_DISPLAY_P3_TO_LMS = _frozen(
    [
        [0.48137985274995420, 0.46211837101131820, 0.05650177623872757],
        [0.22883194181124464, 0.65321681938356770, 0.11795123880518771],
        [0.08394575232299316, 0.22416527097756653, 0.69188897669944030],
    ]
)

LMS_TO_LIN_DISPLAY_P3 = _frozen(
    [
        [3.127768971361874000, -2.257135762591639000, 0.129366791229765000],
        [-1.091009018437797170, 2.413331710306921600, -0.322322691869124430],
        [-0.026010801938570305, -0.508041331704167195, 1.534052133642737500],
    ]
)

# Linear fits of Oklab (a, b) -> linear RGB, used to pick the clipping channel
OKLAB_TO_LIN_SRGB_APPROX = _frozen(
    [
        [-1.88170328, -0.80936493],
        [1.81444104, -1.19445276],
        [0.13110758, 1.81333944],
    ]
)

OKLAB_TO_LIN_DISPLAY_P3_APPROX = _frozen(
    [
        [-1.77234393, -0.82075874],
        [1.80319872, -1.19328140],
        [0.08970488, 1.90327747],
    ]
)

# Polynomial coefficients for the maximum saturation of each RGB channel
MAX_SATURATION_COEFFS = _frozen(
    [
        [1.19086277, 1.76576728, 0.59662641, 0.75515197, 0.56771245],
        [0.73956515, -0.45954404, 0.08285427, 0.12541073, -0.14503204],
        [1.35733652, -0.00915799, -1.1513021, -0.50559606, 0.00692167],
    ]
)

# ----------------------------------------------------------------------
# IPT
# ----------------------------------------------------------------------

XYZ_IPT_TO_LMS_IPT = _frozen(
    [
        [0.4002, 0.7075, -0.0807],
        [-0.2280, 1.1500, 0.0612],
        [0.0, 0.0, 0.9184],
    ]
)

LMS_IPT_TO_XYZ_IPT = _frozen(
    [
        [1.8502429449432054, -1.1383016378672328, 0.238434958508701360],
        [0.3668307751713486, 0.6438845448402356, -0.010673443584379994],
        [0.0, 0.0, 1.088850174216028000],
    ]
)

LMS_P_TO_IPT = _frozen(
    [
        [0.4, 0.4, 0.2],
        [4.4550, -4.8510, 0.3960],
        [0.8056, 0.3572, -1.1628],
    ]
)

IPT_TO_LMS_P = _frozen(
    [
        [1.0, 0.09756893051461392, 0.20522643316459155],
        [1.0, -0.11387648547314713, 0.13321715836999800],
        [1.0, 0.03261510991706641, -0.67688718306917940],
    ]
)

XYZ_TO_XYZ_IPT = _frozen(
    [
        [0.999979809275519500000, -0.000013974897356093877, -0.000020900416479591177],
        [-0.000023919024093394230, 1.000028375977221500000, -0.000005180624258784017],
        [-0.000006534962208447348, 0.000012464505045731156, 0.999849407369585500000],
    ]
)

XYZ_IPT_TO_XYZ = _frozen(
    [
        [1.000020191603027800000, 0.000013974522432789668, 0.000020904058885939936],
        [0.000023918862194212670, 0.999971625097619700000, 0.000005181757508326834],
        [0.000006535780263619562, -0.000012465937322500564, 1.000150615384000630000],
    ]
)

# ----------------------------------------------------------------------
# CAM16
# ----------------------------------------------------------------------

XYZ_TO_CAM16_RGB = _frozen(
    [
        [0.401288, 0.650173, -0.051461],
        [-0.250268, 1.204414, 0.045854],
        [-0.002079, 0.048952, 0.953127],
    ]
)

CAM16_RGB_TO_XYZ = _frozen(
    [
        [1.86206786, -1.01125463, 0.14918677],
        [0.38752654, 0.62144744, -0.00897398],
        [-0.01584150, -0.03412294, 1.04996444],
    ]
)

CAM16_POST_ADAPTATION_INV = _frozen(
    [
        [460.0, 451.0, 288.0],
        [460.0, -891.0, -261.0],
        [460.0, -220.0, -6300.0],
    ]
)

# ----------------------------------------------------------------------
# XYZ with the CIE D65 white (JzAzBz, ICtCp, OSA-UCS)
# ----------------------------------------------------------------------

XYZ_TO_XYZ_CIE = _frozen(
    [
        [1.000001471264523800000, -0.0000016870016842206875, -0.000024877509824106080],
        [-0.000005439309562427436, 1.0000132199401885000000, -0.000007391817532412248],
        [-0.000006072186541514202, 0.0000109008075529770650, 0.999850779792438200000],
    ]
)

XYZ_CIE_TO_XYZ = _frozen(
    [
        [0.999998528897898500000, 0.0000016867056796838337, 0.000024881198471660150],
        [0.000005439274543442979, 0.9999867801631638300000, 0.000007392958308760633],
        [0.000006073024534439253, -0.0000109022800451330500, 1.000149242548059800000],
    ]
)

XYZ_ABS_TO_LMS_JZAZBZ = _frozen(
    [
        [0.41478972, 0.579999, 0.0146480],
        [-0.20151000, 1.120649, 0.0531008],
        [-0.01660080, 0.264800, 0.6684799],
    ]
)

LMS_JZAZBZ_TO_XYZ_ABS = _frozen(
    [
        [1.92422643578760690, -1.00479231259536570, 0.037651404030617994],
        [0.35031676209499907, 0.72648119393165520, -0.065384422948085010],
        [-0.09098281098284755, -0.31272829052307394, 1.522766561305260300],
    ]
)

LMS_P_TO_IZAZBZ = _frozen(
    [
        [0.5, 0.5, 0.0],
        [3.524000, -4.066708, 0.542708],
        [0.199076, 1.096799, -1.295875],
    ]
)

IZAZBZ_TO_LMS_P = _frozen(
    [
        [1.0, 0.13860504327153930, 0.058047316156118600],
        [1.0, -0.13860504327153930, -0.058047316156118904],
        [1.0, -0.09601924202631913, -0.811891896056039009],
    ]
)

XYZ_CIE_TO_LMS_ICTCP = _frozen(
    [
        [0.3591688, 0.6976048, -0.03578840000000002],
        [-0.19218640000000003, 1.1003984, 0.0755404],
        [0.006957599999999998, 0.07491679999999999, 0.843358],
    ]
)

LMS_ICTCP_TO_XYZ_CIE = _frozen(
    [
        [2.0703617049056400, -1.3265905746806500, 0.2066810482469500],
        [0.3649903807779190, 0.6804688205998220, -0.0454616724477699],
        [-0.0495028919589482, -0.0495028919589482, 1.1880694070147600],
    ]
)

LMS_P_TO_ICTCP = _frozen(
    [
        [0.5, 0.5, 0.0],
        [1.613769531250, -3.323486328125, 1.709716796875],
        [4.378173828125, -4.245605468750, -0.132568359375],
    ]
)

ICTCP_TO_LMS_P = _frozen(
    [
        [1.0, 0.008609037037932761, 0.11102962500302593],
        [1.0, -0.008609037037932750, -0.11102962500302599],
        [1.0, 0.560031335710679100, -0.32062717498731885],
    ]
)

XYZ_TO_RGB_OSA_UCS = _frozen(
    [
        [0.7990, 0.4194, -0.1648],
        [-0.4493, 1.3265, 0.0927],
        [-0.1149, 0.3394, 0.7170],
    ]
)

# ----------------------------------------------------------------------
# Chromatic adaptation
# ----------------------------------------------------------------------

BRADFORD = _frozen(
    [
        [0.8951, 0.2664, -0.1614],
        [-0.7502, 1.7135, 0.0367],
        [0.0389, -0.0685, 1.0296],
    ]
)

BRADFORD_INV = _frozen(
    [
        [0.98699290546671240, -0.1470542564209900, 0.1599626516637310],
        [0.43230526972339400, 0.5183602715367777, 0.0492912282128558],
        [-0.00852866457517733, 0.0400428216540847, 0.9684866957875500],
    ]
)
