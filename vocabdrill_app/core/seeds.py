from vocabdrill_app.extensions import db
from vocabdrill_app.models import Semester, VocabWord

WORDS_PER_SEMESTER = 10

SAMPLE_SEMESTERS = [
    {"name": "Grade 7, term 1", "slug": "grade7-1", "description": "Grade 7 first-term vocabulary", "order": 1},
    {"name": "Grade 7, term 2", "slug": "grade7-2", "description": "Grade 7 second-term vocabulary", "order": 2},
    {"name": "Grade 8, term 1", "slug": "grade8-1", "description": "Grade 8 first-term vocabulary", "order": 3},
    {"name": "Grade 8, term 2", "slug": "grade8-2", "description": "Grade 8 second-term vocabulary", "order": 4},
    {"name": "Grade 9, term 1", "slug": "grade9-1", "description": "Grade 9 first-term vocabulary", "order": 5},
    {"name": "Grade 9, term 2", "slug": "grade9-2", "description": "Grade 9 second-term vocabulary", "order": 6},
]

# (word, phonetic, meaning, example_en, example_cn)
SAMPLE_WORDS = [
    # Grade 7, term 1
    ("after", "/ˈɑːftər/", "prep. 在…之后", "We play football after school.", "我们放学后踢足球。"),
    ("age", "/eɪdʒ/", "n. 年龄", "What is your age?", "你多大了？"),
    ("always", "/ˈɔːlweɪz/", "adv. 总是", "He is always late.", "他总是迟到。"),
    ("area", "/ˈeəriə/", "n. 地区", "This area is quiet.", "这个地区很安静。"),
    ("family", "/ˈfæməli/", "n. 家庭", "I love my family.", "我爱我的家。"),
    ("ferry", "/ˈferi/", "n. 渡船", "Take a ferry.", "坐渡船。"),
    ("heavy", "/ˈhevi/", "adj. 重的", "The box is heavy.", "箱子很重。"),
    ("height", "/haɪt/", "n. 高度", "What is your height?", "你身高多少？"),
    ("like", "/laɪk/", "v. 喜欢", "I like reading.", "我喜欢读书。"),
    ("love", "/lʌv/", "n. 爱", "Love is important.", "爱很重要。"),
    # Grade 7, term 2
    ("meet", "/miːt/", "v. 遇见", "Nice to meet you.", "很高兴见到你。"),
    ("museum", "/mjuˈziːəm/", "n. 博物馆", "Visit the museum.", "参观博物馆。"),
    ("never", "/ˈnevər/", "adv. 从不", "I never lie.", "我从不撒谎。"),
    ("number", "/ˈnʌmbər/", "n. 数字", "Phone number.", "电话号码。"),
    ("only", "/ˈəʊnli/", "adv. 仅仅", "Only you.", "只有你。"),
    ("share", "/ʃeər/", "v. 分享", "Share with friends.", "和朋友分享。"),
    ("skate", "/skeɪt/", "v. 滑冰", "Can you skate?", "你会滑冰吗？"),
    ("sometimes", "/ˈsʌmtaɪmz/", "adv. 有时", "I sometimes walk.", "我有时走路。"),
    ("soon", "/suːn/", "adv. 不久", "See you soon.", "回头见。"),
    ("together", "/təˈɡeðər/", "adv. 一起", "Play together.", "一起玩。"),
    # Grade 8, term 1
    ("accept", "/əkˈsept/", "v. 接受", "I accept your invitation.", "我接受你的邀请。"),
    ("achieve", "/əˈtʃiːv/", "v. 实现", "Achieve your dreams.", "实现你的梦想。"),
    ("advantage", "/ədˈvɑːntɪdʒ/", "n. 优势", "This is a big advantage.", "这是一个很大的优势。"),
    ("advertise", "/ˈædvətaɪz/", "v. 做广告", "They advertise on TV.", "他们在电视上做广告。"),
    ("against", "/əˈɡeɪnst/", "prep. 反对", "I am against this idea.", "我反对这个想法。"),
    ("agree", "/əˈɡriː/", "v. 同意", "I agree with you.", "我同意你的看法。"),
    ("allow", "/əˈlaʊ/", "v. 允许", "Smoking is not allowed.", "不允许吸烟。"),
    ("ancient", "/ˈeɪnʃənt/", "adj. 古老的", "Ancient history.", "古代历史。"),
    ("argue", "/ˈɑːɡjuː/", "v. 争论", "Don't argue with me.", "不要和我争论。"),
    ("attack", "/əˈtæk/", "v. 攻击", "The dog might attack.", "狗可能会攻击。"),
    # Grade 8, term 2
    ("balance", "/ˈbæləns/", "n. 平衡", "Keep your balance.", "保持平衡。"),
    ("behave", "/bɪˈheɪv/", "v. 表现", "Behave yourself.", "规矩点。"),
    ("believe", "/bɪˈliːv/", "v. 相信", "I believe you.", "我相信你。"),
    ("beyond", "/bɪˈjɒnd/", "prep. 超过", "Beyond my expectation.", "超出我的预期。"),
    ("borrow", "/ˈbɒrəʊ/", "v. 借", "Can I borrow your pen?", "我可以借你的笔吗？"),
    ("cancel", "/ˈkænsl/", "v. 取消", "The meeting was cancelled.", "会议被取消了。"),
    ("capable", "/ˈkeɪpəbl/", "adj. 有能力的", "She is very capable.", "她很有能力。"),
    ("celebrate", "/ˈselɪbreɪt/", "v. 庆祝", "Let's celebrate!", "让我们庆祝一下！"),
    ("challenge", "/ˈtʃælɪndʒ/", "n. 挑战", "Accept the challenge.", "接受挑战。"),
    ("character", "/ˈkærəktər/", "n. 性格", "He has a strong character.", "他性格坚强。"),
    # Grade 9, term 1
    ("damage", "/ˈdæmɪdʒ/", "n./v. 损害", "The damage was serious.", "损害很严重。"),
    ("decide", "/dɪˈsaɪd/", "v. 决定", "I decided to go.", "我决定去。"),
    ("develop", "/dɪˈveləp/", "v. 发展", "Develop new skills.", "发展新技能。"),
    ("discover", "/dɪˈskʌvər/", "v. 发现", "I discovered a secret.", "我发现了一个秘密。"),
    ("discuss", "/dɪˈskʌs/", "v. 讨论", "Let's discuss it.", "让我们讨论一下。"),
    ("effective", "/ɪˈfektɪv/", "adj. 有效的", "This method is effective.", "这个方法很有效。"),
    ("efficient", "/ɪˈfɪʃnt/", "adj. 高效的", "Be more efficient.", "更高效一点。"),
    ("electricity", "/ɪˌlekˈtrɪsəti/", "n. 电", "Save electricity.", "节约用电。"),
    ("encourage", "/ɪnˈkʌrɪdʒ/", "v. 鼓励", "Encourage each other.", "互相鼓励。"),
    ("environment", "/ɪnˈvaɪrənmənt/", "n. 环境", "Protect the environment.", "保护环境。"),
    # Grade 9, term 2
    ("focus", "/ˈfəʊkəs/", "v. 集中", "Focus on your work.", "专注于你的工作。"),
    ("fortune", "/ˈfɔːtʃuːn/", "n. 财富", "Make a fortune.", "发财。"),
    ("freedom", "/ˈfriːdəm/", "n. 自由", "Freedom of speech.", "言论自由。"),
    ("guilty", "/ˈɡɪlti/", "adj. 内疚的", "I feel guilty.", "我感到内疚。"),
    ("imagine", "/ɪˈmædʒɪn/", "v. 想象", "Imagine the future.", "想象未来。"),
    ("improve", "/ɪmˈpruːv/", "v. 改进", "Improve yourself.", "提升自己。"),
    ("inspire", "/ɪnˈspaɪər/", "v. 激励", "Inspire others.", "激励他人。"),
    ("manage", "/ˈmænɪdʒ/", "v. 管理", "Manage your time.", "管理你的时间。"),
    ("necessary", "/ˈnesəseri/", "adj. 必要的", "It is necessary.", "这是必要的。"),
    ("opportunity", "/ˌɒpəˈtjuːnəti/", "n. 机会", "Seize the opportunity.", "抓住机会。"),
]


def seed_sample_data():
    """Insert the sample semesters and their words when no semester exists yet.

    Returns a dict with the number of semesters and words inserted.
    """
    if Semester.query.first() is not None:
        return {"semesters": 0, "words": 0, "skipped": True}

    semesters = [Semester(**data) for data in SAMPLE_SEMESTERS]
    db.session.add_all(semesters)
    db.session.flush()

    word_count = 0
    for index, semester in enumerate(semesters):
        chunk = SAMPLE_WORDS[index * WORDS_PER_SEMESTER:(index + 1) * WORDS_PER_SEMESTER]
        for order, (word, phonetic, meaning, example_en, example_cn) in enumerate(chunk):
            db.session.add(
                VocabWord(
                    semester_id=semester.id,
                    word=word,
                    phonetic=phonetic,
                    meaning=meaning,
                    example_en=example_en,
                    example_cn=example_cn,
                    order=order,
                )
            )
            word_count += 1

    db.session.commit()
    return {"semesters": len(semesters), "words": word_count, "skipped": False}
