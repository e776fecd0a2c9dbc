# /guidebot/config/strings.py

# This file contains all user-facing strings of the guide chatbot, so they can be
# overridden from the `strings` collection without changing application logic.

# Persona and template fallbacks
DEFAULT_USER_NAME = "행복♥"
PRICE_ON_REQUEST = "가격 문의"
SCHEDULE_ON_REQUEST = "일정 문의"
DESTINATION_FALLBACK = "여행지"

# Synthesized choice on single-path questions
ASK_FAMILY_OPTION = "가족과 상의해야 해요"

# Error messages
QUESTION_NOT_FOUND = "질문을 찾을 수 없습니다."
START_QUESTION_NOT_FOUND = "시작 질문을 찾을 수 없습니다."
FLOW_NOT_FOUND = "활성화된 채팅봇 플로우가 없습니다."
QUESTION_LOAD_FAILED = "질문을 불러오는 중 오류가 발생했습니다."
START_FAILED = "채팅봇을 시작하는 중 오류가 발생했습니다."

# Section headings (also recognised on hand-authored content)
CRUISE_PHOTOS_HEADING = "📸 **크루즈 사진**"
CRUISE_REVIEW_PHOTOS_HEADING = "📸 **크루즈 후기 사진**"
DESTINATION_PHOTOS_HEADING = "📸 **여행지 사진**"
ROOM_PHOTOS_HEADING = "🏠 **객실 사진**"
TESTIMONIALS_HEADING = "⭐ **실제 고객님 후기**"

# Image alt texts
CRUISE_PHOTO_ALT = "크루즈 사진"
CRUISE_REVIEW_PHOTO_ALT = "크루즈 후기 사진"
DESTINATION_PHOTO_ALT = "여행지 사진"
ROOM_PHOTO_ALT = "객실 사진"
IMAGE_CLICK_HINT = "💡 사진을 클릭하면 크게 볼 수 있어요!"

# Video call-to-action lines
CRUISE_LINE_VIDEO_TITLE = "{cruiseLine} 크루즈 실제 여행 영상"
CRUISE_LINE_VIDEO_CTA = "영상을 클릭해서 보시면 크루즈 여행의 모든 장점과 이득을 확인하실 수 있어요! 🎬"
PROBLEM_VIDEO_CTA = "영상을 클릭해서 보시고, 다음 문제로 넘어가주세요."
SOLUTION_VIDEO_CTA = "영상을 클릭해서 보시고, 다음 해결책으로 넘어가주세요."
BUSAN_VIDEO_CTA = "영상을 보시고 다음으로 넘어가주세요."
BALCONY_VIDEO_CTA = "영상을 보시고 객실 선택으로 넘어가주세요."

# Testimonials
TESTIMONIAL_AUTHOR_FALLBACK = "고객님"
TESTIMONIAL_TITLE_FALLBACK = "크루즈 여행 후기"
MORE_REVIEWS_LINK = "👉 더 많은 후기는 [크루즈몰](/)에서 확인하실 수 있어요!"

DEFAULT_REVIEWS_BODY = """**1. 송이엄마님** ⭐⭐⭐⭐⭐
"MSC 벨리시마 지중해 크루즈 최고의 여행!"
지중해 크루즈 여행을 다녀왔는데 정말 최고였습니다. 배도 크고 시설도 좋고 음식도 맛있었어요...

**2. 찡찡님** ⭐⭐⭐⭐⭐
"코스타 세레나 첫 크루즈 여행 후기"
평생 처음 크루즈 여행을 했는데 너무 좋았어요. 다음에도 또 가고 싶습니다...
"""

DEFAULT_TERMINAL_REVIEWS_BODY = """**1. 송이엄마님** ⭐⭐⭐⭐⭐
"처음엔 터미널이 어딘지 몰라서 구글 지도만 10번도 더 봤어요. 택시 기사님도 정확히 모르셔서 한참 헤맸어요..."

**2. 찡찡님** ⭐⭐⭐⭐⭐
"크루즈 터미널 찾는 게 정말 어려웠어요. 다음엔 미리 알아봐야겠어요."
"""
