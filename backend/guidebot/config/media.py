# /guidebot/config/media.py

# Static media catalog used by the augmentation rules: curated videos, the
# cruise line → video mapping and the destination vocabulary.
# Order matters in every list below.

# Destination vocabulary: (canonical name, aliases searched in product text)
DESTINATION_VOCABULARY = [
    ("홍콩", ["홍콩"]),
    ("대만", ["대만", "타이완"]),
    ("제주", ["제주"]),
    ("후쿠오카", ["후쿠오카"]),
    ("사세보", ["사세보"]),
    ("도쿄", ["도쿄"]),
    ("나가사키", ["나가사키"]),
    ("오키나와", ["오키나와"]),
    ("싱가포르", ["싱가포르"]),
    ("베트남", ["베트남"]),
]

# Problem videos (positions 4.5 and 7-9)
PROBLEM_VIDEOS = [
    {
        "title": "왜 부산 출발하는 크루즈가 없나요?",
        "url": "https://youtube.com/shorts/E0iLWnqjGfA?si=zUyU05vlIeYYSdNl",
        "description": "부산 출발 크루즈에 대한 궁금증을 해결해보세요!",
    },
    {
        "title": "실제 크루즈 크기는 어떨까?",
        "url": "https://youtu.be/ZAsw4sv5HZk?si=0-_A5YB0BfO4B-QF",
        "description": "크루즈의 실제 크기와 규모를 확인해보세요!",
    },
    {
        "title": "크루즈 여행 무료는 뭐고 유료는 뭐에요?",
        "url": "https://youtu.be/IKPCY9G0Uc4?si=Zs8_oUMNJ_hpYeV9",
        "description": "크루즈 여행에서 무엇이 무료이고 무엇이 유료인지 궁금하시죠?",
    },
    {
        "title": "크루즈 여행 처음이라구요? 안내를 받아야 하는 이유",
        "url": "https://youtu.be/DaKs6uK6IQM?si=yCAIy_ML3UqfZi7S",
        "description": "처음 크루즈 여행을 가시는 분들을 위한 필수 안내!",
    },
    {
        "title": "크루즈 자유여행 시작하면 맞이하는 현실",
        "url": "https://youtu.be/pDxwnanm3C4?si=Q8PRfcP-3DknHbiL",
        "description": "자유여행으로 가면 어떤 현실을 맞이하게 될까요?",
    },
    {
        "title": "크루즈 자유여행 터미널에 가면?",
        "url": "https://youtu.be/Gv7b6pVKt38?si=wf0-hjS8TN-vZgGf",
        "description": "터미널에서 겪게 되는 현실적인 문제들",
    },
    {
        "title": "크루즈 탑승 이렇게 하면 못타요",
        "url": "https://youtu.be/JURxMno7mME?si=BRJqibDqWTqQ8mNl",
        "description": "탑승 전 꼭 알아야 할 주의사항들",
    },
    {
        "title": "크루즈 터미널 초행길이라면 꼭 체크해야 할 꿀 팁",
        "url": "https://youtu.be/CSZy5MSUfx8?si=AjcILCQOhjuq7V0b",
        "description": "터미널에서 놓치면 안 되는 중요한 팁들",
    },
]

# Solution videos (positions 10-18.7)
SOLUTION_VIDEOS = [
    {
        "title": "크루즈 여행이 가성비 BEST인 이유",
        "url": "https://youtube.com/shorts/3SUQvs4qtXo?si=opMh0myd021J5EGH",
        "description": "크루즈 여행이 왜 가성비 최고인지 확인해보세요!",
    },
    {
        "title": "크루즈를 확실히 가성비 갑으로 가는법",
        "url": "https://youtube.com/shorts/5WvjUNk71a8?si=rm9yvIuoHbrTJhbC",
        "description": "100만원 이상의 가성비를 아낄 수 있는 확실한 방법을 알려드려요!",
    },
    {
        "title": "피해 없이 비행기 가성비 아끼면서 예약하는 방법 꿀팁",
        "url": "https://youtu.be/EnKJo9Ax6ys?si=9xuuCngwAkPPki_Q",
        "description": "100만원 이상의 가성비를 아낄 수 있는 방법을 알려드려요!",
    },
    {
        "title": "크루즈닷 가이드 지니 AI와 걱정없이 가는 방법",
        "url": "https://youtu.be/-p_6G69MgyQ?si=L8m9s-aN-kIzDMKy",
        "description": "크루즈닷 지니 AI와 함께하면 모든 걱정이 사라져요!",
    },
    {
        "title": "크루즈닷이 그래서 함께 한다면?",
        "url": "https://youtu.be/acYl4x4E6uw?si=F2L2SHXKy56mluZu",
        "description": "크루즈닷과 함께하면 어떤 특별한 경험을 할 수 있을까요?",
    },
    {
        "title": "APEC 정상회담 숙소에 썼던 크루즈도 크루즈닷이?",
        "url": "https://youtu.be/QkC4Ymf7CR8?si=tgSkikI8DLrCf_Zu",
        "description": "신뢰할 수 있는 크루즈닷의 실력과 경험",
    },
    {
        "title": "행복하게 놀생각만 하세요",
        "url": "https://youtu.be/i7Btan_R09Q?si=51iRsYt_V57y7va6",
        "description": "크루즈닷과 함께하면 모든 준비는 저희가 해드려요!",
    },
]

BALCONY_ROOM_VIDEO = {
    "title": "코스타 발코니 룸은 어떻게 생겼죠?",
    "url": "https://youtube.com/shorts/adwUUww4thw?si=e7MDkktHds8b_ay3",
    "description": "실제 코스타 발코니 룸의 모습을 확인해보세요!",
}

# Cruise line keyword → real-trip video. Matched by substring on the upper-cased line name.
CRUISE_LINE_VIDEOS = {
    "코스타": "https://youtu.be/Y0aaA9SfvlU?si=6ZkJozqYRPF8C5Vl",
    "COSTA": "https://youtu.be/Y0aaA9SfvlU?si=6ZkJozqYRPF8C5Vl",
    "MSC": "https://youtu.be/QcTTmP5Ldt4?si=mcG88DRo4wLmcv-B",
    "로얄": "https://youtu.be/AAf4CNX-7Co?si=0Z1x0_D3PVeGTbXu",
    "ROYAL": "https://youtu.be/AAf4CNX-7Co?si=0Z1x0_D3PVeGTbXu",
    "ROYAL CARIBBEAN": "https://youtu.be/AAf4CNX-7Co?si=0Z1x0_D3PVeGTbXu",
}

DEFAULT_CRUISE_LINE = "MSC"
DEFAULT_CRUISE_LINE_VIDEO = CRUISE_LINE_VIDEOS["MSC"]

# Phrases in a question that ask for destination photos
DESTINATION_PHOTO_PHRASES = ["여행지 사진 보기", "📸", "여행지 사진", "사진 보기"]

BUSAN_QUESTION_PHRASE = "왜 부산 출발하는 크루즈가 없나요"
